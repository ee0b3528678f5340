"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Defaults to a local SQLite file next to the working directory
- Admin credentials default to placeholders and must be overridden in
  any real deployment
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings", "get_settings", "PLACEHOLDER_ADMIN_PASS"]

PLACEHOLDER_ADMIN_PASS = "change_me_strong_pass"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Project Configuration
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level used when running the service directly"
    )

    # Database Configuration
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./data.sqlite",
        description="Database connection string"
    )

    # Server Configuration
    HOST: str = Field(default="0.0.0.0", description="Interface to bind")
    PORT: int = Field(default=3000, description="Listening port")

    # Admin Authentication
    ADMIN_USER: str = Field(default="admin", description="Basic auth username for /admin routes")
    ADMIN_PASS: str = Field(
        default=PLACEHOLDER_ADMIN_PASS,
        description="Basic auth password for /admin routes"
    )
    ADMIN_REALM: str = Field(default="Admin", description="Realm sent in the auth challenge")

    # Reporting
    RECENT_VISITS_DEFAULT: int = Field(
        default=100,
        description="Rows returned by the recent visits listing when no valid limit is given"
    )
    RECENT_VISITS_MAX: int = Field(
        default=500,
        description="Hard cap on rows returned by the recent visits listing"
    )
    TOP_COUNTRIES_LIMIT: int = Field(
        default=10,
        description="Countries listed per window in the stats report"
    )


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the active settings."""
    return settings
