"""Application settings and configuration management."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Matcher settings with environment variable support."""

    # Application
    app_name: str = Field(default="Indexed Token Matcher")
    app_version: str = Field(default="1.0.0")

    # Search Configuration
    default_max_count: int = Field(default=200, ge=0)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")
    log_build_events: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="ITM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate the log renderer name."""
        if v.lower() not in ("json", "console"):
            raise ValueError("Log format must be 'json' or 'console'")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
