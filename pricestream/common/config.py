"""Application configuration via environment variables.

Uses pydantic-settings to load from .env file and PRICESTREAM_* environment
variables. All config is centralized here; import `get_settings()`.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="PRICESTREAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ─── App ───
    environment: str = "development"
    log_level: str = "DEBUG"

    # ─── Ingestion ───
    csv_encoding: str = "utf-8-sig"  # tolerates a leading BOM

    # ─── Streaming ───
    default_window_size: int = Field(default=5, ge=1)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings singleton.

    Uses lru_cache so Settings is only instantiated once.
    In tests, call `get_settings.cache_clear()` to reset.
    """
    return Settings()
