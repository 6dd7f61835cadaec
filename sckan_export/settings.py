"""SCKAN exporter configuration using Pydantic.

Loads settings from:
1. an optional YAML file (``--config``)
2. Environment variables (``SCKAN_*``, also read from ``.env``)
3. Default values
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SCKANSettings(BaseSettings):
    """Connection and logging settings for one export run."""

    model_config = SettingsConfigDict(
        env_prefix="SCKAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Stardog Configuration ---
    username: str = Field(default="SPARC")
    password: str = Field(default="")
    endpoint: str = Field(default="https://stardog.scicrunch.io:5821")
    database: str = Field(default="NPO")
    reasoning: bool = False
    query_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Seconds to wait for a single query response",
    )

    # --- Logging ---
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = None

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "SCKANSettings":
        """Load configuration overrides from a YAML file"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            return cls()

        with open(yaml_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)


# Global settings instance
_settings: Optional[SCKANSettings] = None


def get_settings() -> SCKANSettings:
    """Get or create global settings instance"""
    global _settings
    if _settings is None:
        _settings = SCKANSettings()
    return _settings


def reload_settings(yaml_path: Optional[str | Path] = None) -> SCKANSettings:
    """Rebuild the global settings, optionally from a YAML file"""
    global _settings
    _settings = SCKANSettings.from_yaml(yaml_path) if yaml_path else SCKANSettings()
    return _settings
