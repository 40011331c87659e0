"""
Converter Registry

Maps ``(source, target)`` format pairs to pure content transforms:
- @register_converter(source, target) decorator for registration
- get_converter() lookup used by convert_to()

Adding a format means registering its pairs; existing pairs are untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Tuple

from ManifestTools.errors import UnrecognizedFormatError
from ManifestTools.models import ManifestFormat

__all__ = ["ContentConverter", "get_converter", "get_registry", "register_converter"]

_LOGGER = logging.getLogger(__name__)

ContentConverter = Callable[[Mapping[str, Any]], Dict[str, Any]]

_REGISTRY: Dict[Tuple[ManifestFormat, ManifestFormat], ContentConverter] = {}


def register_converter(source: ManifestFormat, target: ManifestFormat):
    """Decorator to register a content transform for ``source`` → ``target``."""

    def deco(func: ContentConverter) -> ContentConverter:
        key = (source, target)
        if key in _REGISTRY:
            _LOGGER.warning("Overriding already-registered converter: %s → %s", source, target)
        _REGISTRY[key] = func
        _LOGGER.debug("Registered converter: %s → %s (%s)", source, target, func.__name__)
        return func

    return deco


def get_registry() -> Dict[Tuple[ManifestFormat, ManifestFormat], ContentConverter]:
    """Get the converter registry (copy)."""
    return dict(_REGISTRY)


def get_converter(source: ManifestFormat, target: ManifestFormat) -> ContentConverter:
    """Lookup the converter for a format pair."""
    try:
        return _REGISTRY[(source, target)]
    except KeyError:
        raise UnrecognizedFormatError(
            f"No converter registered for {source} → {target}.", value=(source, target)
        ) from None
