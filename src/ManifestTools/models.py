"""Canonical in-memory representation of a web application manifest."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from ManifestTools.errors import UnrecognizedFormatError

__all__ = ["ManifestFormat", "ManifestInfo", "FormatLike"]


class ManifestFormat(str, Enum):
    """Manifest dialects understood by the converter."""

    W3C = "w3c"
    CHROME_OS = "chromeOS"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "ManifestFormat":
        """Match ``value`` case-insensitively, treating ``None`` as :attr:`W3C`."""

        if value is None:
            return cls.W3C
        if isinstance(value, ManifestFormat):
            return value
        if isinstance(value, str):
            normalized = value.lower()
            for member in cls:
                if member.value.lower() == normalized:
                    return member
        raise UnrecognizedFormatError(value=value)


FormatLike = Union[ManifestFormat, str, None]


@dataclass
class ManifestInfo:
    """Manifest content paired with the format dialect it follows.

    ``content`` is exactly the JSON object read from disk or the network; the
    ``format`` tag only lives in memory and is never serialized. Readers leave
    ``format`` unset and :func:`ManifestTools.converters.convert_to` fills in
    the ``w3c`` default.
    """

    content: Dict[str, Any]
    format: FormatLike = None
