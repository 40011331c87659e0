"""Convert a :class:`~ManifestTools.models.ManifestInfo` between manifest formats."""

from __future__ import annotations

import copy
import logging
from typing import Any, Optional

from ManifestTools.errors import (
    CONVERT_VALIDATION_MESSAGE,
    UNRECOGNIZED_FORMAT_MESSAGE,
    UnrecognizedFormatError,
    ValidationError,
)
from ManifestTools.models import FormatLike, ManifestFormat, ManifestInfo

from . import chrome_os  # noqa: F401  (registers the w3c/chromeOS pairs)
from .registry import get_converter, get_registry, register_converter

__all__ = ["convert_to", "get_converter", "get_registry", "register_converter"]

LOGGER = logging.getLogger(__name__)


def _parse_format(value: Any) -> ManifestFormat:
    try:
        return ManifestFormat.parse(value)
    except UnrecognizedFormatError:
        LOGGER.debug("Unrecognized manifest format: %r", value)
        raise UnrecognizedFormatError(UNRECOGNIZED_FORMAT_MESSAGE, value=value) from None


def convert_to(manifest_info: Optional[ManifestInfo], target_format: FormatLike) -> ManifestInfo:
    """Return ``manifest_info`` expressed in ``target_format``.

    An unset ``manifest_info.format`` is treated as ``w3c`` and that default is
    stored on the input object; an unset ``target_format`` also means ``w3c``.
    When both formats match (case-insensitively) the input instance itself is
    returned, so callers can detect a no-op with ``is``. Otherwise the
    registered converter for the pair builds a new ``ManifestInfo``.

    Raises:
        ValidationError: If ``manifest_info`` is missing or carries no content.
        UnrecognizedFormatError: If either format is outside the supported set.
    """

    content = getattr(manifest_info, "content", None) if manifest_info is not None else None
    if content is None:
        raise ValidationError(CONVERT_VALIDATION_MESSAGE)

    if manifest_info.format is None:
        manifest_info.format = ManifestFormat.W3C

    source = _parse_format(manifest_info.format)
    target = _parse_format(target_format)
    if source is target:
        return manifest_info

    converter = get_converter(source, target)
    converted = converter(copy.deepcopy(content))
    LOGGER.debug("Converted manifest %s → %s (%d keys)", source, target, len(converted))
    return ManifestInfo(content=converted, format=target)
