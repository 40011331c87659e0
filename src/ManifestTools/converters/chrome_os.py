"""Transforms between W3C web app manifests and Chrome OS hosted app manifests.

Only the fields both dialects share are carried over. The launch URL lives at
``start_url`` in a W3C manifest and at ``app.launch.web_url`` in a Chrome OS
hosted app manifest. Everything else is dropped rather than guessed.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from ManifestTools.models import ManifestFormat

from .registry import register_converter

SHARED_FIELDS = ("name", "short_name", "description", "default_locale")


def _copy_shared(content: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: content[key] for key in SHARED_FIELDS if key in content}


@register_converter(ManifestFormat.W3C, ManifestFormat.CHROME_OS)
def w3c_to_chrome_os(content: Mapping[str, Any]) -> Dict[str, Any]:
    converted = _copy_shared(content)
    start_url = content.get("start_url")
    if isinstance(start_url, str) and start_url:
        converted["app"] = {"launch": {"web_url": start_url}}
    return converted


@register_converter(ManifestFormat.CHROME_OS, ManifestFormat.W3C)
def chrome_os_to_w3c(content: Mapping[str, Any]) -> Dict[str, Any]:
    converted = _copy_shared(content)
    app = content.get("app")
    launch = app.get("launch") if isinstance(app, Mapping) else None
    web_url = launch.get("web_url") if isinstance(launch, Mapping) else None
    if isinstance(web_url, str) and web_url:
        converted["start_url"] = web_url
    return converted
