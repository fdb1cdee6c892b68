"""Configuration settings for trparser."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``TRPARSER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRPARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    log_json_format: bool = False

    # Remote documents
    http_timeout: float = 30.0

    # Parse defaults, used when options are given as a plain mapping
    ignore_error_count: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
