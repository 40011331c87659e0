"""Resolve a site URL into a manifest, synthesizing a default when none is declared."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ManifestTools.config.models import HttpSettings
from ManifestTools.download import download_manifest_from_url
from ManifestTools.http_session import client_scope
from ManifestTools.locator import get_manifest_url_from_site
from ManifestTools.models import ManifestInfo

__all__ = ["default_manifest_for", "get_manifest_from_site"]

LOGGER = logging.getLogger(__name__)


def default_manifest_for(site_url: str) -> ManifestInfo:
    """Return the minimal manifest used for sites that declare none."""

    return ManifestInfo(content={"start_url": site_url})


def get_manifest_from_site(
    site_url: str,
    *,
    client: Optional[httpx.Client] = None,
    settings: Optional[HttpSettings] = None,
) -> ManifestInfo:
    """Produce a manifest for ``site_url``.

    The page is inspected first; a declared manifest is downloaded, otherwise
    a default manifest anchored at ``site_url`` is returned. Locator errors
    (:class:`~ManifestTools.errors.SiteRetrievalError`) propagate before any
    download starts, and downloader errors propagate unchanged.
    """

    with client_scope(client, settings) as http:
        manifest_url = get_manifest_url_from_site(site_url, client=http, settings=settings)
        if manifest_url is None:
            LOGGER.warning("No manifest declared by %s; using a default manifest", site_url)
            return default_manifest_for(site_url)
        return download_manifest_from_url(manifest_url, client=http, settings=settings)
