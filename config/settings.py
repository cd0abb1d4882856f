"""
Application settings module.

Manages all configuration via environment variables using pydantic-settings.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local record storage settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="STORAGE_", extra="ignore")

    path: Path = Path("data/records.json")
    key: str = "savedRecords"


class ExportSettings(BaseSettings):
    """Export artifact settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="EXPORT_", extra="ignore")

    directory: Path = Path("exports")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    storage: StorageSettings = StorageSettings()
    export: ExportSettings = ExportSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
