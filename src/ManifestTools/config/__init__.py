"""Configuration models and loaders for ManifestTools."""

from .loader import ENV_PREFIX, export_config_schema, load_config
from .models import HttpSettings, ManifestToolsConfig, OutputSettings

__all__ = [
    "ENV_PREFIX",
    "HttpSettings",
    "ManifestToolsConfig",
    "OutputSettings",
    "export_config_schema",
    "load_config",
]
