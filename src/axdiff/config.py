"""Configuration management for axdiff.

Changes:
  - 2026-10-17: Initial settings for baseline keys, identity and capture.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Get the config directory, creating if needed."""
    config_dir = Path.home() / ".axdiff"
    config_dir.mkdir(exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.json"


class Settings(BaseSettings):
    """axdiff settings with env and file support."""

    model_config = SettingsConfigDict(
        env_prefix="AXDIFF_",
        env_file=".env",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")

    # Baselines
    default_baseline_key: str = Field(
        default="default", description="Baseline key used when a call names none"
    )
    replace_baseline: bool = Field(
        default=True, description="Overwrite the baseline after each comparison"
    )

    # Identity
    fingerprint_identity: bool = Field(
        default=False,
        description=(
            "Key nodes without browser identifiers by role/name fingerprint "
            "instead of tree position"
        ),
    )

    # Capture
    capture_interesting_only: bool = Field(
        default=True, description="Drop ignored accessibility nodes when capturing"
    )

    def save(self) -> None:
        """Save settings to the config file."""
        config_path = get_config_path()
        config_path.write_text(json.dumps(self.model_dump(), indent=2))

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from config file, falling back to env/defaults."""
        config_path = get_config_path()
        if config_path.exists():
            try:
                data = json.loads(config_path.read_text())
                return cls(**data)
            except (json.JSONDecodeError, ValueError) as e:
                logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return cls()


@lru_cache
def get_settings(force_reload: bool = False) -> Settings:
    """Get cached settings instance."""
    if force_reload:
        get_settings.cache_clear()
    return Settings.load()
