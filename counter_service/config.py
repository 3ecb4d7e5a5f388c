"""Application configuration loading via Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from counter_service.paths import STORAGE_DIR


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    storage_dir: Path = Field(default=STORAGE_DIR, alias="STORAGE_DIR")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    storage_fsync: bool = Field(default=True, alias="STORAGE_FSYNC")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    settings = Settings()
    settings.storage_dir.mkdir(parents=True, exist_ok=True)
    return settings
