"""
Tunnelgate runtime configuration using Pydantic Settings.

These settings drive the tool itself, not the gateway it resolves
settings for.

Environment variables use TUNNELGATE_ prefix:
- TUNNELGATE_SECRETS_DIR, TUNNELGATE_CONFIG_FILE
- TUNNELGATE_LOG_LEVEL, TUNNELGATE_LOG_FORMAT
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="TUNNELGATE_LOG_",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level"
    )
    format: str = Field(
        default="console",
        description="Log format (json, console)"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator('format')
    @classmethod
    def validate_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in {"json", "console"}:
            raise ValueError(f"Invalid log format: {v}. Must be json or console")
        return v_lower


class AppSettings(BaseSettings):
    """
    Tunnelgate tool settings.

    Loaded from environment variables (TUNNELGATE_* prefix) over defaults.
    Command line options take precedence over both.
    """

    model_config = SettingsConfigDict(
        env_prefix="TUNNELGATE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    secrets_dir: Path = Field(
        default=Path("/run/secrets"),
        description="Directory holding secret files"
    )
    config_file: Optional[Path] = Field(
        default=None,
        description="Optional YAML settings file"
    )
    log: LogSettings = Field(default_factory=LogSettings)


@lru_cache()
def get_app_settings() -> AppSettings:
    """Get tool settings (cached singleton)."""
    return AppSettings()
