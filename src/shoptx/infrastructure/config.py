"""Centralized application settings.

Values come from ``SHOPTX_*`` environment variables or a ``.env`` file
in the working directory.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the order engine."""

    model_config = SettingsConfigDict(
        env_prefix="SHOPTX_",
        env_file=".env",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///shoptx.db"
    pool_size: int = Field(default=10, ge=1)
    max_overflow: int = Field(default=20, ge=0)
    pool_pre_ping: bool = True
    sqlite_busy_timeout: float = Field(default=30.0, gt=0)  # seconds
    echo_sql: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


def get_settings(database_url: str | None = None, **kwargs) -> Settings:
    """Load settings; an explicit ``database_url`` wins over the environment."""
    if database_url is not None:
        kwargs["database_url"] = database_url
    return Settings(**kwargs)
