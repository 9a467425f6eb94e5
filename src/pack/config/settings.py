from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import (
    to_uppercase,
    to_lowercase,
    parse_data_size,
    format_size_in_mb,
)

class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"
    PROJECT_NAME: str = "Pack Resources API"
    API_V1_PREFIX: str = "/api/v1"

    # Database configuration
    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str = "pack"
    POSTGRES_PASSWORD: str = "pack"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "pack"

    # Full URL (e.g. "sqlite+aiosqlite:///./pack.db"); wins over the POSTGRES_* parts when set
    DATABASE_URL_OVERRIDE: str | None = None

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False
    CREATE_SCHEMA_ON_STARTUP: bool = True

    # Uploads (data sizes such as "10MB", stored as bytes)
    MAX_FILE_SIZE: int = 10 * 1024 * 1024
    MAX_REQUEST_SIZE: int = 10 * 1024 * 1024

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/pack")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL for the current environment.

        - `DATABASE_URL_OVERRIDE`, when provided, is returned as-is.
        - Otherwise the URL is built from the POSTGRES_* parts.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )

    @property
    def max_file_size_label(self) -> str:
        """Configured per-file limit rendered for error messages, e.g. "10.00 MB"."""
        return format_size_in_mb(self.MAX_FILE_SIZE)

    @property
    def max_request_size_label(self) -> str:
        return format_size_in_mb(self.MAX_REQUEST_SIZE)

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before the Literal check runs, so
        "debug" from the environment is accepted as "DEBUG".
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("MAX_FILE_SIZE", "MAX_REQUEST_SIZE", mode="before")
    def normalize_data_size(cls, v: str | int | None) -> int | None:
        """
        Accept data-size strings ("10MB", "512KB") as well as raw byte counts.
        """
        return parse_data_size(v)

    model_config = SettingsConfigDict(
        # Load environment variables from the .env file at the project root.
        env_file=str(Path(__file__).resolve().parents[3] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() avoids re-reading the environment on every request.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
