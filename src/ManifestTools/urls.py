"""URL helpers shared by the site locator and the manifest downloader."""

from __future__ import annotations

from typing import Any
from urllib.parse import urljoin, urlsplit

__all__ = ["is_absolute_http_url", "resolve_href"]

_SUPPORTED_SCHEMES = frozenset({"http", "https"})


def is_absolute_http_url(value: Any) -> bool:
    """Return ``True`` when ``value`` is an absolute ``http``/``https`` URL with a host.

    Whitespace anywhere in the string disqualifies it, so inputs such as
    ``"invalid url"`` are rejected before any request is attempted.
    """

    if not isinstance(value, str) or not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
        # Accessing ``port`` validates the netloc (raises on out-of-range ports).
        _ = parts.port
    except ValueError:
        return False
    return parts.scheme.lower() in _SUPPORTED_SCHEMES and bool(parts.hostname)


def resolve_href(base_url: str, href: str) -> str:
    """Resolve ``href`` against ``base_url``; absolute hrefs come back unchanged."""

    return urljoin(base_url, href.strip())
