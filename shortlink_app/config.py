from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

from shortlink_app.constants import (
    DEFAULT_MAX_ATTEMPTS,
    MAX_SHORT_CODE_LENGTH,
    MIN_SHORT_CODE_LENGTH,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "Shortlink"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Database
    database_url: str = "sqlite:///./shortlink.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: float = 30.0  # Seconds to wait for a pooled connection

    # Short links
    base_url: str = "http://127.0.0.1:8000"
    short_code_length: int = Field(MIN_SHORT_CODE_LENGTH, le=MAX_SHORT_CODE_LENGTH)
    max_generation_attempts: int = Field(DEFAULT_MAX_ATTEMPTS, ge=1)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[str] = None

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("short_code_length")
    @classmethod
    def floor_short_code_length(cls, value: int) -> int:
        """Codes shorter than the minimum are silently raised to it."""
        return max(MIN_SHORT_CODE_LENGTH, value)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


# Create settings instance
settings = Settings()
