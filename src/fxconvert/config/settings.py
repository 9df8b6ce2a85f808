# src/fxconvert/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables (or a .env file) and every field has
a working default, so the service starts with no configuration at all.

Files that USE this module:
- fxconvert.app (loads settings for server, store, feed and scheduler wiring)
- fxconvert.adapters.providers.ecb (default feed URL and timeout)

Files that this module USES:
- fxconvert.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fxconvert.shared.validators import validate_cron_expression, validate_timezone

DEFAULT_ECB_URL = "https://www.ecb.europa.eu/stats/eurofxref/eurofxref-daily.xml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- HTTP server ---
    server_host: str = Field(default="0.0.0.0", alias="SERVER_HOST")
    server_port: int = Field(default=3000, alias="SERVER_PORT", ge=1, le=65535)
    cors_allow_origins: str = Field(default="*", alias="CORS_ALLOW_ORIGINS")

    # --- Cache store ---
    redis_url: str = Field(default="redis://localhost:6379", alias="REDIS_URL")
    redis_timeout_seconds: float = Field(default=5.0, alias="REDIS_TIMEOUT_SECONDS", gt=0, le=60)

    # --- Upstream feed ---
    ecb_url: str = Field(default=DEFAULT_ECB_URL, alias="ECB_URL")
    http_timeout_seconds: int = Field(default=30, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=300)

    # --- Scheduling ---
    # 6-field form has a leading seconds field: daily at 15:00:00
    update_cron: str = Field(default="0 0 15 * * *", alias="UPDATE_CRON")
    update_timezone: str = Field(default="UTC", alias="UPDATE_TIMEZONE")

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="FXCONVERT_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def server_address(self) -> str:
        return f"{self.server_host}:{self.server_port}"

    @property
    def cors_origins(self) -> List[str]:
        """CORS origins as a list (comma-separated in the environment)."""
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    @field_validator("update_cron")
    @classmethod
    def validate_update_cron(cls, v: str) -> str:
        """Validate cron expression format."""
        if not validate_cron_expression(v):
            raise ValueError(f"Invalid UPDATE_CRON expression: {v!r}")
        return v.strip()

    @field_validator("update_timezone")
    @classmethod
    def validate_update_timezone(cls, v: str) -> str:
        """Validate time zone name."""
        if not validate_timezone(v):
            raise ValueError(f"Unknown UPDATE_TIMEZONE: {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return v


# Global settings instance
settings = Settings()
