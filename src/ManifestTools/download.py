"""Download a manifest document from a URL."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ManifestTools.config.models import HttpSettings
from ManifestTools.errors import DOWNLOAD_MESSAGE, INVALID_DOWNLOAD_FORMAT_MESSAGE, DownloadError
from ManifestTools.http_session import PayloadTooLarge, client_scope, fetch
from ManifestTools.io_utils import parse_manifest_bytes
from ManifestTools.models import ManifestInfo
from ManifestTools.urls import is_absolute_http_url

__all__ = ["download_manifest_from_url"]

LOGGER = logging.getLogger(__name__)


def download_manifest_from_url(
    url: str,
    *,
    client: Optional[httpx.Client] = None,
    settings: Optional[HttpSettings] = None,
) -> ManifestInfo:
    """Download the JSON manifest at ``url``.

    Args:
        url: Absolute http(s) URL of the manifest.
        client: Optional HTTPX client; one is created for the call otherwise.
        settings: HTTP settings (timeouts, payload cap) for created clients.

    Returns:
        ManifestInfo: Decoded content with ``format`` left unset.

    Raises:
        DownloadError: If the URL is invalid, the request fails, the status is
            not a success, or the body exceeds ``max_manifest_bytes``.
        InvalidFormatError: If the body is not a JSON object.
    """

    if not is_absolute_http_url(url):
        LOGGER.debug("Rejecting manifest URL %r before any request", url)
        raise DownloadError()

    cfg = settings or HttpSettings()
    with client_scope(client, cfg) as http:
        try:
            result = fetch(http, url, max_bytes=cfg.max_manifest_bytes)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            LOGGER.debug("Manifest %s answered HTTP %s", url, status)
            raise DownloadError(DOWNLOAD_MESSAGE, url=url, status_code=status) from exc
        except (httpx.RequestError, httpx.InvalidURL, PayloadTooLarge) as exc:
            LOGGER.debug("Request for manifest %s failed: %s", url, exc)
            raise DownloadError(DOWNLOAD_MESSAGE, url=url) from exc

    content = parse_manifest_bytes(result.content, message=INVALID_DOWNLOAD_FORMAT_MESSAGE)
    LOGGER.debug("Downloaded manifest from %s (%d keys)", url, len(content))
    return ManifestInfo(content=content)
