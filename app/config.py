# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.REVIEWS_DB_FILE)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Shipped fallback for the admin secret. Accepted outside production only.
DEFAULT_ADMIN_DELETE_KEY = "change-this-admin-delete-key"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    ADMIN_DELETE_KEY: str = Field(
        default=DEFAULT_ADMIN_DELETE_KEY,
        min_length=1,
        description="Shared secret required in the x-admin-key header to delete reviews"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    REVIEWS_DB_FILE: Path = Field(
        default=Path("reviews.db.json"),
        description="JSON document holding all reviews"
    )

    MAX_BODY_KB: int = Field(
        default=200,
        ge=1,
        le=10_240,
        description="Maximum accepted request body size in KB"
    )

    STATIC_DIR: Path | None = Field(
        default=None,
        description="Optional directory served at / (the review board front-end)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _refuse_default_key_in_production(self) -> "Settings":
        if self.is_production and self.uses_default_admin_key:
            raise ValueError(
                "ADMIN_DELETE_KEY must be set to a non-default value in production"
            )
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def max_body_bytes(self) -> int:
        return self.MAX_BODY_KB * 1024

    @property
    def uses_default_admin_key(self) -> bool:
        return self.ADMIN_DELETE_KEY == DEFAULT_ADMIN_DELETE_KEY

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
