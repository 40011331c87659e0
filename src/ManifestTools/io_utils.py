# === NAVMAP v1 ===
# {
#   "module": "ManifestTools.io_utils",
#   "purpose": "Read manifests from disk and persist manifest content atomically",
#   "sections": [
#     {
#       "id": "parse-manifest-bytes",
#       "name": "parse_manifest_bytes",
#       "anchor": "function-parse-manifest-bytes",
#       "kind": "function"
#     },
#     {
#       "id": "get-manifest-from-file",
#       "name": "get_manifest_from_file",
#       "anchor": "function-get-manifest-from-file",
#       "kind": "function"
#     },
#     {
#       "id": "atomic-write-bytes",
#       "name": "atomic_write_bytes",
#       "anchor": "function-atomic-write-bytes",
#       "kind": "function"
#     },
#     {
#       "id": "write-to-file",
#       "name": "write_to_file",
#       "anchor": "function-write-to-file",
#       "kind": "function"
#     }
#   ]
# }
# === /NAVMAP ===

"""Filesystem side of the manifest pipeline.

**Responsibilities**
--------------------
- :func:`get_manifest_from_file` reads a whole JSON file and wraps the decoded
  object in a :class:`~ManifestTools.models.ManifestInfo`.
- :func:`write_to_file` serializes only ``ManifestInfo.content`` and persists
  it with :func:`atomic_write_bytes`.
- :func:`parse_manifest_bytes` is the shared "is this a JSON object" check used
  by both the file reader and the HTTP downloader.

**Safety**
----------
- Writes go to a temporary file in the destination directory, are fsynced, and
  are moved into place with ``os.replace``; the temporary file is removed on
  any failure so no partial manifest is left behind.
- The destination directory is never created: writing into a missing
  directory is reported as :class:`~ManifestTools.errors.ManifestIOError`.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ManifestTools.config.models import OutputSettings
from ManifestTools.errors import (
    INVALID_FILE_FORMAT_MESSAGE,
    WRITE_VALIDATION_MESSAGE,
    InvalidFormatError,
    ManifestIOError,
    ValidationError,
)
from ManifestTools.models import ManifestInfo

__all__ = [
    "atomic_write_bytes",
    "get_manifest_from_file",
    "parse_manifest_bytes",
    "write_to_file",
]

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def parse_manifest_bytes(raw: Union[bytes, str], *, message: str) -> Dict[str, Any]:
    """Decode ``raw`` as JSON and require a top-level object.

    Malformed JSON, undecodable bytes, nesting too deep to decode, and
    non-object values (arrays, strings, numbers, ``null``) all raise
    :class:`InvalidFormatError` with ``message``.
    """

    try:
        parsed = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as exc:
        raise InvalidFormatError(message) from exc
    if not isinstance(parsed, dict):
        raise InvalidFormatError(message)
    return parsed


def get_manifest_from_file(path: PathLike) -> ManifestInfo:
    """Load the manifest stored at ``path``.

    Args:
        path: Location of a JSON manifest.

    Returns:
        ManifestInfo: Decoded content with ``format`` left unset.

    Raises:
        ManifestIOError: If the file does not exist or cannot be read.
        InvalidFormatError: If the file is not a JSON object.
    """

    target = Path(path)
    try:
        raw = target.read_bytes()
    except OSError as exc:
        raise ManifestIOError(f"Unable to read manifest file: {target}", path=str(target)) from exc

    content = parse_manifest_bytes(raw, message=INVALID_FILE_FORMAT_MESSAGE)
    LOGGER.debug("Loaded manifest from %s (%d keys)", target, len(content))
    return ManifestInfo(content=content)


def atomic_write_bytes(dest_path: PathLike, payload: bytes) -> int:
    """Write ``payload`` to ``dest_path`` atomically and return the byte count.

    Uses a temporary file + fsync + ``os.replace`` in the destination
    directory. The directory must already exist.

    Raises:
        OSError: If any filesystem step fails; the temporary file is removed.
    """

    dest = os.fspath(dest_path)
    dest_dir = os.path.dirname(dest) or "."

    fd, tmp_path = tempfile.mkstemp(dir=dest_dir, prefix=".part-", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, dest)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise
    return len(payload)


def write_to_file(
    manifest_info: Optional[ManifestInfo],
    path: PathLike,
    *,
    output: Optional[OutputSettings] = None,
) -> None:
    """Persist ``manifest_info.content`` as JSON at ``path``.

    The ``format`` tag is never written. Validation happens before the
    filesystem is touched.

    Raises:
        ValidationError: If ``manifest_info`` is missing or carries no content.
        ManifestIOError: If the target directory is missing or the write fails.
    """

    content = getattr(manifest_info, "content", None) if manifest_info is not None else None
    if content is None:
        raise ValidationError(WRITE_VALIDATION_MESSAGE)

    settings = output or OutputSettings()
    payload = json.dumps(content, indent=settings.indent, ensure_ascii=settings.ensure_ascii)
    try:
        written = atomic_write_bytes(path, payload.encode("utf-8"))
    except OSError as exc:
        raise ManifestIOError(f"Unable to write manifest file: {path}", path=str(path)) from exc
    LOGGER.debug("Wrote %d bytes of manifest content to %s", written, path)
