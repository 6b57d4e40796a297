"""
Runtime configuration for docvault.

Settings are read from environment variables (or a local .env file) with
pydantic-settings; every field has a development-friendly default.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_config import LogFormat, LogLevel, LogVerbosity

MAX_FILE_SIZE_BYTES = 100 * 1024 * 1024


class DocVaultSettings(BaseSettings):
    """Application settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )

    # Application
    app_name: str = Field(default="docvault", alias="APP_NAME")
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Database
    database_url: str = Field(
        default="postgresql://localhost:5432/docvault",
        alias="DATABASE_URL"
    )
    db_schema: str = Field(default="public", alias="DB_SCHEMA")
    db_pool_min_size: int = Field(default=2, alias="DB_POOL_MIN_SIZE")
    db_pool_max_size: int = Field(default=10, alias="DB_POOL_MAX_SIZE")
    db_command_timeout: float = Field(default=60.0, alias="DB_COMMAND_TIMEOUT")

    # Uploads and storage
    max_file_size: int = Field(default=MAX_FILE_SIZE_BYTES, alias="MAX_FILE_SIZE")
    presigned_url_ttl_seconds: int = Field(default=3600, alias="PRESIGNED_URL_TTL_SECONDS")
    download_url_ttl_seconds: int = Field(default=300, alias="DOWNLOAD_URL_TTL_SECONDS")
    storage_root: str = Field(default="./storage", alias="STORAGE_ROOT")
    upload_base_url: Optional[str] = Field(default=None, alias="UPLOAD_BASE_URL")

    # Pagination
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, alias="MAX_PAGE_SIZE")

    # Logging
    log_level: LogLevel = Field(default=LogLevel.INFO, alias="LOG_LEVEL")
    log_verbosity: LogVerbosity = Field(default=LogVerbosity.NORMAL, alias="LOG_VERBOSITY")
    log_format: LogFormat = Field(default=LogFormat.SIMPLE, alias="LOG_FORMAT")

    @field_validator("database_url")
    @classmethod
    def strip_driver_suffix(cls, value: str) -> str:
        """asyncpg does not understand SQLAlchemy-style driver suffixes."""
        return value.replace("+asyncpg", "")

    @field_validator("max_file_size")
    @classmethod
    def validate_max_file_size(cls, value: int) -> int:
        if value < 1 or value > MAX_FILE_SIZE_BYTES:
            raise ValueError(f"MAX_FILE_SIZE must be between 1 and {MAX_FILE_SIZE_BYTES}")
        return value

    @field_validator("default_page_size", "max_page_size")
    @classmethod
    def validate_page_size(cls, value: int) -> int:
        if value < 1 or value > 100:
            raise ValueError("Page size must be between 1 and 100")
        return value

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> DocVaultSettings:
    """Get cached settings instance."""
    return DocVaultSettings()
