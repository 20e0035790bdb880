"""Library configuration using pydantic-settings."""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PAGINIZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Pagination
    default_page_size: int = Field(10, ge=1)

    # Logging
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Apply a log level to the package logger.

    Only the ``paginize`` logger is touched; handlers stay with the application.
    """
    package_logger = logging.getLogger("paginize")
    package_logger.setLevel((level or get_settings().log_level).upper())
    return package_logger
