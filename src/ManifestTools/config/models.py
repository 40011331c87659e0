"""
Pydantic v2 Configuration Models for ManifestTools

Provides strict, typed configuration for the manifest tooling:
- HTTP client settings (timeouts, TLS, redirects, payload cap)
- Output settings for written manifests
- Top-level ManifestToolsConfig as single source of truth

All models use extra="forbid" for strict validation. Environment variables
and CLI overrides follow: file < env < CLI precedence.
"""

from __future__ import annotations

import hashlib
import json
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ManifestTools.errors import UnrecognizedFormatError
from ManifestTools.models import ManifestFormat

DEFAULT_USER_AGENT = "ManifestTools/1.0 (+https://github.com/manifest-tools/manifest-tools)"


class HttpSettings(BaseModel):
    """Configuration for HTTP client behavior."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent string")
    timeout_connect_s: float = Field(default=10.0, description="Connection timeout in seconds")
    timeout_read_s: float = Field(default=30.0, description="Read timeout in seconds")
    follow_redirects: bool = Field(default=True, description="Follow 3xx responses")
    verify_tls: bool = Field(default=True, description="Verify TLS certificates")
    max_manifest_bytes: Optional[int] = Field(
        default=1 << 20, description="Largest accepted manifest body (None = unlimited)"
    )

    @field_validator("timeout_connect_s", "timeout_read_s")
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be > 0")
        return v

    @field_validator("max_manifest_bytes")
    @classmethod
    def validate_max_bytes(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("max_manifest_bytes must be > 0 or None")
        return v


class OutputSettings(BaseModel):
    """Configuration for manifests written to disk."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    indent: Optional[int] = Field(default=2, description="JSON indent (None = compact)")
    ensure_ascii: bool = Field(default=False, description="Escape non-ASCII characters")

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("indent must be >= 0 or None")
        return v


class ManifestToolsConfig(BaseModel):
    """
    Single source of truth for ManifestTools configuration.

    Loaded from file (YAML/JSON), overlaid with environment variables,
    and finally overridden by CLI arguments. Precedence: file < env < CLI.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", validate_assignment=True)

    http: HttpSettings = Field(default_factory=HttpSettings, description="HTTP client settings")
    output: OutputSettings = Field(
        default_factory=OutputSettings, description="Output file settings"
    )
    default_format: ManifestFormat = Field(
        default=ManifestFormat.W3C, description="Target format when none is requested"
    )

    @field_validator("default_format", mode="before")
    @classmethod
    def validate_default_format(cls, v: object) -> ManifestFormat:
        try:
            return ManifestFormat.parse(v)
        except UnrecognizedFormatError as exc:
            raise ValueError(f"Unknown manifest format: {v!r}") from exc

    def config_hash(self) -> str:
        """
        Compute deterministic SHA256 hash of config for reproducibility.

        Returns:
            Hex-encoded SHA256 hash of normalized config JSON.
        """
        normalized = json.dumps(self.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(normalized.encode()).hexdigest()
