# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# Every tunable of the WTWR API, read from the environment (or .env) by
# pydantic-settings and validated once at import time.
#
# Usage:
#   from app.config import settings
#   settings.JWT_EXPIRES_DAYS
#
# The JWT secret lives here and nowhere else. It is read once at startup and
# handed to the auth layer through Depends(get_settings).
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Only the two Supabase values are required; everything else has a
    development default. Routes receive it through Depends(get_settings).
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # Required. A missing value fails at import time.

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    DB_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Timeout applied to every database request"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    JWT_SECRET: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Shared secret for signing and verifying bearer tokens"
    )

    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        description="HMAC algorithm used for bearer tokens"
    )

    JWT_EXPIRES_DAYS: int = Field(
        default=7,
        ge=1,
        le=365,
        description="Token lifetime in days"
    )

    BCRYPT_ROUNDS: int = Field(
        default=10,
        ge=4,
        le=15,
        description="bcrypt cost factor for password hashes"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, API docs)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=3001,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level (DEBUG forces verbose output)"
    )

    REQUEST_LOG_FILE: str | None = Field(
        default=None,
        description="If set, every request is appended here as a JSON line"
    )

    ERROR_LOG_FILE: str | None = Field(
        default=None,
        description="If set, every error response is appended here as a JSON line"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat VAR= as unset so the default applies
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://wtwr.app" -> ["http://localhost:3000", "https://wtwr.app"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def log_level(self) -> str:
        """Effective log level; DEBUG mode always wins."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Parsed once; the same instance is shared by every request.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
