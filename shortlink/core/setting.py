"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- A Settings instance is handed to create_app(), nothing reads globals
- Defaults match a local checkout: port 3002, data/links.json
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "get_settings", "PACKAGE_DIR"]

PACKAGE_DIR = Path(__file__).resolve().parent.parent


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

    # Server Configuration
    HOST: str = Field(
        default="0.0.0.0",
        description="Address the HTTP server binds to"
    )
    PORT: int = Field(
        default=3002,
        description="TCP port the HTTP server listens on"
    )

    # Storage Configuration
    # The whole link map lives in one JSON document, rewritten on every create
    DATA_FILE: Path = Field(
        default=Path("data") / "links.json",
        description="Path of the JSON document holding short code -> URL mappings"
    )
    STATIC_DIR: Path = Field(
        default=PACKAGE_DIR / "static",
        description="Directory containing index.html and style.css"
    )

    # Application Configuration
    BASE_URL: Optional[str] = Field(
        default=None,
        description="Public base URL for generated short URLs (request host is used when unset)"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    SHORT_CODE_BYTES: int = Field(
        default=4,
        ge=1,
        description="Random bytes per generated short code (hex encoded, so 4 -> 8 characters)"
    )


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
