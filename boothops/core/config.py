"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional, Union
import os
import warnings

from boothops.core.constants import (
    ADMIN_TOKEN_TTL_HOURS as DEFAULT_ADMIN_TOKEN_TTL_HOURS,
    SUPERADMIN_CLASS_NAME as DEFAULT_SUPERADMIN_CLASS_NAME,
    VOID_WINDOW_SECONDS as DEFAULT_VOID_WINDOW_SECONDS,
)

DEFAULT_SUPERADMIN_PASSWORD = "dudtkswnd1!"
DEFAULT_BOOTH_PIN = "0000"
SEED_MODES = ("if-empty", "fresh", "none")


def _split_csv(v):
    """Parse a list setting given either as a list or a comma-separated string."""
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Database
    DATABASE_URL: Optional[str] = None
    DB_POOL_SIZE: int = 10  # Ignored for SQLite
    DB_MAX_OVERFLOW: int = 20  # Ignored for SQLite
    AUTO_INIT_DB: bool = True  # Create tables and seed on startup
    SEED_MODE: str = "if-empty"  # if-empty, fresh, none

    # Booth admin directory
    SUPERADMIN_CLASS_NAME: str = DEFAULT_SUPERADMIN_CLASS_NAME
    SUPERADMIN_PASSWORD: str = DEFAULT_SUPERADMIN_PASSWORD
    DEFAULT_BOOTH_PIN: str = DEFAULT_BOOTH_PIN

    # Sessions and usage policy
    ADMIN_TOKEN_TTL_HOURS: int = DEFAULT_ADMIN_TOKEN_TTL_HOURS
    VOID_WINDOW_SECONDS: int = DEFAULT_VOID_WINDOW_SECONDS

    # CORS - Can be a list or comma-separated string
    CORS_ORIGINS: Union[list, str] = ["*"]

    # Routing - every router is mounted under API_PREFIX and each mirror prefix
    API_PREFIX: str = "/api"
    API_MIRROR_PREFIXES: Union[list, str] = ["/ys-fest/api"]

    @field_validator("CORS_ORIGINS", "API_MIRROR_PREFIXES", mode="before")
    @classmethod
    def parse_list(cls, v):
        """Parse list settings from comma-separated string or list."""
        return _split_csv(v)

    @field_validator("SEED_MODE")
    @classmethod
    def check_seed_mode(cls, v: str) -> str:
        if v not in SEED_MODES:
            raise ValueError(f"SEED_MODE must be one of {', '.join(SEED_MODES)}")
        return v

    # Application
    APP_TITLE: str = "Booth Ops"
    APP_DESCRIPTION: str = "Festival booth check-in with per-student usage caps"
    APP_VERSION: str = "1.0.0"

    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True

    def get_database_url(self) -> str:
        """
        Get database URL.
        Priority: DATABASE_URL > local SQLite file (development only)
        """
        if self.DATABASE_URL:
            url = self.DATABASE_URL
            # Handle Heroku-style postgres:// URLs
            if url.startswith("postgres://"):
                url = url.replace("postgres://", "postgresql://", 1)
            return url

        if self.ENVIRONMENT != "production":
            return "sqlite:///./boothops.db"

        raise ValueError("Database configuration missing. Provide DATABASE_URL.")

    def get_api_prefixes(self) -> list:
        """Primary API prefix followed by its mirrors, without duplicates."""
        prefixes = []
        for prefix in [self.API_PREFIX, *self.API_MIRROR_PREFIXES]:
            normalized = "/" + prefix.strip("/") if prefix.strip("/") else ""
            if normalized not in prefixes:
                prefixes.append(normalized)
        return prefixes

    def validate_production_config(self) -> None:
        """Validate that production-critical settings are properly configured."""
        if self.ENVIRONMENT == "production":
            issues = []

            if self.SUPERADMIN_PASSWORD == DEFAULT_SUPERADMIN_PASSWORD:
                issues.append("SUPERADMIN_PASSWORD must be changed from default value")

            if self.CORS_ORIGINS == ["*"]:
                issues.append("CORS_ORIGINS should be restricted to specific domains")

            if self.DEFAULT_BOOTH_PIN == DEFAULT_BOOTH_PIN:
                warnings.warn(
                    "DEFAULT_BOOTH_PIN is still '0000'; change booth PINs from the dashboard",
                    stacklevel=2,
                )

            if issues:
                raise ValueError(
                    "Production configuration errors:\n" +
                    "\n".join(f"  - {issue}" for issue in issues)
                )


settings = Settings()

# Validate production configuration on startup
if os.getenv("ENVIRONMENT") == "production":
    settings.validate_production_config()
