"""
Application configuration.

Settings are read from environment variables (or a local ``.env`` file) with
pydantic-settings and cached for the lifetime of the process:

    from orderdesk.core.config import get_settings

    settings = get_settings()
    if settings.is_production:
        ...
"""

import logging
import sys
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Process-wide settings.

    Storage:
        storage_backend selects where uploaded images go. ``local`` writes into
        ``uploads_dir`` and serves them under ``uploads_url_prefix``; ``spaces``
        pushes them to an S3-compatible bucket and returns CDN urls.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode",
    )
    debug: bool = Field(default=False, description="Expose error details in 500 responses")
    app_name: str = Field(default="OrderDesk API")
    app_version: str = Field(default="1.0.0")
    log_level: str = Field(default="INFO")

    # ==========================================================================
    # DATABASE
    # ==========================================================================

    database_url: str = Field(
        default="sqlite+aiosqlite:///./orderdesk.db",
        description="Async SQLAlchemy URL (postgresql+asyncpg://... in production)",
    )
    database_echo: bool = Field(default=False, description="Log every SQL statement")

    # ==========================================================================
    # SECRETS
    # ==========================================================================

    encryption_master_key: str = Field(
        default="default-insecure-key-change-in-production",
        description="Master key the Fernet key for stored API keys is derived from",
    )

    # ==========================================================================
    # UPLOADS
    # ==========================================================================

    storage_backend: str = Field(default="local", description="local | spaces")
    uploads_dir: str = Field(default="public/uploads")
    uploads_url_prefix: str = Field(default="/uploads")
    max_upload_bytes: int = Field(default=2 * 1024 * 1024)

    spaces_key: Optional[str] = None
    spaces_secret: Optional[str] = None
    spaces_region: str = "nyc3"
    spaces_bucket: Optional[str] = None
    spaces_endpoint: Optional[str] = None
    spaces_cdn_base: Optional[str] = None
    spaces_prefix: str = "prod"

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v):
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(str(v).lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("local", "spaces"):
            raise ValueError("storage_backend must be 'local' or 'spaces'")
        return v

    @property
    def is_production(self) -> bool:
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def expose_error_details(self) -> bool:
        return self.debug or not self.is_production


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Configure root logging once at process start."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)-28s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # SQL echo is controlled by database_echo, not the app log level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)

    return logging.getLogger("orderdesk")
