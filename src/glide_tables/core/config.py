# src/glide_tables/core/config.py
"""
Client configuration and loading.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

# Per-request row limit documented by the Big Tables API.
MAX_MUTATIONS = 500

DEFAULT_ENDPOINT = "https://api.glideapps.com"


class GlideSettings(BaseModel):
    """Connection and batching settings for the Big Tables API.

    Example YAML (GLIDE_* variables override any key; @format pulls a
    differently named variable into a value):
        token: "@format {env[PROD_API_TOKEN]}"
        endpoint: https://api.glideapps.com
        max_mutations: 500
        max_concurrency: 4
    """

    model_config = {"frozen": True}

    token: str = Field(min_length=1, description="Bearer token for the API")
    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        description="REST endpoint; https:// is assumed when no scheme is given",
    )
    client_id: str | None = Field(
        default=None,
        description="Optional value for the X-Glide-Client-ID header",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    max_mutations: int = Field(
        default=MAX_MUTATIONS,
        ge=1,
        description="Maximum rows per add/overwrite request",
    )
    max_concurrency: int = Field(
        default=1,
        ge=1,
        description="Chunks allowed in flight at once for one add/overwrite call",
    )

    @field_validator("token", "client_id", mode="before")
    @classmethod
    def coerce_to_str(cls, v: Any) -> Any:
        """Dynaconf parses numeric-looking env values; tokens stay strings."""
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("endpoint")
    @classmethod
    def normalize_endpoint(cls, v: str) -> str:
        if not v:
            raise ValueError("endpoint must not be empty")
        if "://" not in v:
            v = f"https://{v}"
        return v.rstrip("/")


def load_settings(config_path: Path | None = None, **overrides: Any) -> GlideSettings:
    """Load settings from an optional YAML file with environment overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Explicit keyword overrides - highest priority
    2. Environment variables (GLIDE_*)
    3. Config file (YAML), when given
    4. Defaults from Pydantic schema - lowest priority

    Args:
        config_path: Optional path to a YAML configuration file
        **overrides: Values taking precedence over file and environment
            (None values are ignored)

    Returns:
        Validated GlideSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config_path is given but doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="GLIDE",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,  # No [default]/[production] sections
        load_dotenv=False,  # CLI loads .env itself
    )

    # Dynaconf returns uppercase keys and its own internals; keep known fields only
    known = set(GlideSettings.model_fields)
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k.lower() in known}
    raw_config.update({k: v for k, v in overrides.items() if v is not None})

    return GlideSettings(**raw_config)
