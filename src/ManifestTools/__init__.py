"""
ManifestTools

Retrieve web application manifests from local files or live sites, convert
them between the W3C and Chrome OS formats, and write them back to disk.

Typical flow::

    from ManifestTools import convert_to, get_manifest_from_site, write_to_file

    info = get_manifest_from_site("https://example.org/")
    write_to_file(convert_to(info, "chromeOS"), "manifest.json")
"""

from ManifestTools.converters import convert_to, register_converter
from ManifestTools.download import download_manifest_from_url
from ManifestTools.errors import (
    DownloadError,
    InvalidFormatError,
    ManifestIOError,
    ManifestToolsError,
    RemoteManifestError,
    SiteRetrievalError,
    UnrecognizedFormatError,
    ValidationError,
)
from ManifestTools.io_utils import get_manifest_from_file, write_to_file
from ManifestTools.locator import get_manifest_url_from_site
from ManifestTools.models import ManifestFormat, ManifestInfo
from ManifestTools.resolver import get_manifest_from_site

__version__ = "1.0.0"

__all__ = [
    "DownloadError",
    "InvalidFormatError",
    "ManifestFormat",
    "ManifestIOError",
    "ManifestInfo",
    "ManifestToolsError",
    "RemoteManifestError",
    "SiteRetrievalError",
    "UnrecognizedFormatError",
    "ValidationError",
    "convert_to",
    "download_manifest_from_url",
    "get_manifest_from_file",
    "get_manifest_from_site",
    "get_manifest_url_from_site",
    "register_converter",
    "write_to_file",
]
