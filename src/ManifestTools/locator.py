# === NAVMAP v1 ===
# {
#   "module": "ManifestTools.locator",
#   "purpose": "Discover the manifest URL a web page declares via <link rel=manifest>",
#   "sections": [
#     {
#       "id": "find-manifest-href",
#       "name": "find_manifest_href",
#       "anchor": "function-find-manifest-href",
#       "kind": "function"
#     },
#     {
#       "id": "get-manifest-url-from-site",
#       "name": "get_manifest_url_from_site",
#       "anchor": "function-get-manifest-url-from-site",
#       "kind": "function"
#     }
#   ]
# }
# === /NAVMAP ===
"""Locate the manifest a site declares in its HTML."""

from __future__ import annotations

import logging
import warnings
from typing import Any, Optional, Sequence, Union

import httpx
from bs4 import BeautifulSoup, ParserRejectedMarkup, XMLParsedAsHTMLWarning

from ManifestTools.config.models import HttpSettings
from ManifestTools.errors import SITE_RETRIEVAL_MESSAGE, SiteRetrievalError
from ManifestTools.http_session import PayloadTooLarge, client_scope, fetch
from ManifestTools.urls import is_absolute_http_url, resolve_href

__all__ = ["find_manifest_href", "get_manifest_url_from_site"]

LOGGER = logging.getLogger(__name__)

# Site pages can be much larger than manifests; cap them separately.
_MAX_PAGE_BYTES = 10 << 20


def _rel_tokens(rel: Any) -> set:
    if isinstance(rel, str):
        rel = rel.split()
    if isinstance(rel, Sequence):
        return {str(token).lower() for token in rel}
    return set()


def find_manifest_href(
    markup: Union[str, bytes], *, encoding: Optional[str] = None
) -> Optional[str]:
    """Return the ``href`` of the first ``<link rel="manifest">`` in ``markup``.

    Raw bytes are decoded by BeautifulSoup: ``encoding`` (the HTTP charset)
    wins when given, otherwise a ``<meta charset>`` in the page is honoured.
    Links without a non-empty ``href`` are skipped. Markup the parser rejects
    outright is treated as a page without a manifest link.
    """

    try:
        with warnings.catch_warnings():
            warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
            if isinstance(markup, bytes):
                soup = BeautifulSoup(markup, "lxml", from_encoding=encoding)
            else:
                soup = BeautifulSoup(markup, "lxml")
    except ParserRejectedMarkup as exc:
        LOGGER.warning("Could not parse site HTML, assuming no manifest link: %s", exc)
        return None

    for tag in soup.find_all("link"):
        if "manifest" not in _rel_tokens(tag.get("rel")):
            continue
        href = tag.get("href")
        if isinstance(href, str) and href.strip():
            return href.strip()
    return None


def get_manifest_url_from_site(
    site_url: str,
    *,
    client: Optional[httpx.Client] = None,
    settings: Optional[HttpSettings] = None,
) -> Optional[str]:
    """Fetch ``site_url`` and return the absolute URL of its declared manifest.

    Args:
        site_url: Absolute http(s) URL of the page to inspect.
        client: Optional HTTPX client; one is created for the call otherwise.
        settings: HTTP settings used when a client has to be created.

    Returns:
        Optional[str]: The manifest URL, or ``None`` when the page declares none.

    Raises:
        SiteRetrievalError: If the URL is invalid, the request fails, or the
            server answers with a non-success status.
    """

    if not is_absolute_http_url(site_url):
        LOGGER.debug("Rejecting site URL %r before any request", site_url)
        raise SiteRetrievalError()

    with client_scope(client, settings) as http:
        try:
            page = fetch(http, site_url, max_bytes=_MAX_PAGE_BYTES)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            LOGGER.debug("Site %s answered HTTP %s", site_url, status)
            raise SiteRetrievalError(
                SITE_RETRIEVAL_MESSAGE, url=site_url, status_code=status
            ) from exc
        except (httpx.RequestError, httpx.InvalidURL, PayloadTooLarge) as exc:
            LOGGER.debug("Request for site %s failed: %s", site_url, exc)
            raise SiteRetrievalError(SITE_RETRIEVAL_MESSAGE, url=site_url) from exc

    href = find_manifest_href(page.content, encoding=page.encoding)
    if href is None:
        LOGGER.debug("No manifest link declared by %s", site_url)
        return None

    manifest_url = resolve_href(site_url, href)
    LOGGER.debug("Site %s declares manifest %s", site_url, manifest_url)
    return manifest_url
