# === NAVMAP v1 ===
# {
#   "module": "ManifestTools.errors",
#   "purpose": "Define the exception hierarchy used across manifest reading, retrieval, and conversion",
#   "sections": [
#     {"id": "base", "name": "Base Exceptions", "anchor": "BAS", "kind": "api"},
#     {"id": "input", "name": "Input & Format Errors", "anchor": "INP", "kind": "api"},
#     {"id": "remote", "name": "Remote Retrieval Errors", "anchor": "REM", "kind": "api"},
#     {"id": "hints", "name": "Actionable Hints", "anchor": "HNT", "kind": "api"}
#   ]
# }
# === /NAVMAP ===

"""Exception hierarchy shared across manifest reading, retrieval, and conversion.

Every failure raised by :mod:`ManifestTools` derives from
:class:`ManifestToolsError`, so callers can catch the whole family at once
while still reacting to specific categories (invalid input, filesystem
problems, remote retrieval failures, unknown formats). The messages carried by
each error are part of the public contract and are asserted by the test suite.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

__all__ = [
    "ManifestToolsError",
    "ValidationError",
    "InvalidFormatError",
    "UnrecognizedFormatError",
    "ManifestIOError",
    "RemoteManifestError",
    "SiteRetrievalError",
    "DownloadError",
    "describe_error",
    "INVALID_FILE_FORMAT_MESSAGE",
    "INVALID_DOWNLOAD_FORMAT_MESSAGE",
    "WRITE_VALIDATION_MESSAGE",
    "CONVERT_VALIDATION_MESSAGE",
    "UNRECOGNIZED_FORMAT_MESSAGE",
    "SITE_RETRIEVAL_MESSAGE",
    "DOWNLOAD_MESSAGE",
]

INVALID_FILE_FORMAT_MESSAGE = "Invalid manifest format"
INVALID_DOWNLOAD_FORMAT_MESSAGE = "Invalid manifest format."
WRITE_VALIDATION_MESSAGE = "Manifest content is empty or invalid."
CONVERT_VALIDATION_MESSAGE = "Manifest content is empty or not initialized."
UNRECOGNIZED_FORMAT_MESSAGE = "Manifest format is not recognized."
SITE_RETRIEVAL_MESSAGE = "Failed to retrieve manifest from site."
DOWNLOAD_MESSAGE = "Failed to download manifest data."


class ManifestToolsError(RuntimeError):
    """Base exception for manifest retrieval, persistence, and conversion failures."""


class ValidationError(ManifestToolsError):
    """Raised when a manifest info object is missing or has no content."""


class InvalidFormatError(ManifestToolsError):
    """Raised when a manifest payload is not a JSON object."""


class UnrecognizedFormatError(ManifestToolsError):
    """Raised when a format tag falls outside the supported set."""

    def __init__(self, message: str = UNRECOGNIZED_FORMAT_MESSAGE, *, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class ManifestIOError(ManifestToolsError, OSError):
    """Raised when a manifest file cannot be read or written."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class RemoteManifestError(ManifestToolsError):
    """Raised when an HTTP retrieval step cannot produce a usable response."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class SiteRetrievalError(RemoteManifestError):
    """Raised when the site page declaring the manifest cannot be fetched."""

    def __init__(
        self,
        message: str = SITE_RETRIEVAL_MESSAGE,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, url=url, status_code=status_code)


class DownloadError(RemoteManifestError):
    """Raised when the manifest document itself cannot be downloaded."""

    def __init__(
        self,
        message: str = DOWNLOAD_MESSAGE,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, url=url, status_code=status_code)


def describe_error(exc: BaseException) -> Tuple[str, Optional[str]]:
    """Return ``(message, suggestion)`` for presenting ``exc`` to a user.

    Examples:
        >>> describe_error(DownloadError(url="https://example.org/m.json", status_code=404))
        ('Failed to download manifest data.', 'The server answered HTTP 404 for https://example.org/m.json.')
    """

    message = str(exc)
    if isinstance(exc, RemoteManifestError):
        if exc.url is None:
            return message, "Pass an absolute http:// or https:// URL."
        if exc.status_code is not None:
            return message, f"The server answered HTTP {exc.status_code} for {exc.url}."
        return message, f"Check network connectivity, DNS resolution, or proxy settings for {exc.url}."
    if isinstance(exc, ManifestIOError):
        return message, "Check that the path exists and that its directory is writable."
    if isinstance(exc, InvalidFormatError):
        return message, "The manifest must be a JSON object."
    if isinstance(exc, UnrecognizedFormatError):
        return message, "Supported formats: w3c, chromeOS."
    return message, None
