"""
Base configuration settings for the application
"""
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator, Field, SecretStr
from pathlib import Path


class Settings(BaseSettings):
    """Base settings with common functionality and validation"""

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "str_strip_whitespace": True,
        "validate_default": True,
        "env_prefix": "SITESTATS_",
        "validate_assignment": True,
        "extra": "ignore"
    }

    # API Settings
    API_V1_STR: str = Field("/api/v1", description="API version prefix")
    PROJECT_NAME: str = Field("Site Stats", description="Project name")
    VERSION: str = Field("1.0.0", description="API version")
    DESCRIPTION: str = Field(
        "Visitor analytics API for a markdown publishing site",
        description="API description"
    )
    DEBUG: bool = Field(False, description="Debug mode")

    # Security Settings
    ADMIN_API_KEY: Optional[SecretStr] = Field(
        None,
        description="Bearer key for admin endpoints (backfill, cleanup). Admin endpoints are closed when unset"
    )

    # CORS Settings
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # Tracking windows (milliseconds)
    PAGE_VIEW_DEDUP_WINDOW_MS: int = Field(
        30 * 60 * 1000, ge=0,
        description="Same session + path within this window counts as one view"
    )
    SESSION_TIMEOUT_MS: int = Field(
        2 * 60 * 1000, ge=1000,
        description="Sessions without a heartbeat for this long are inactive"
    )
    HEARTBEAT_DEDUP_MS: int = Field(
        20 * 1000, ge=0,
        description="Heartbeats closer together than this are skipped"
    )

    # Backfill Settings
    BACKFILL_BATCH_SIZE: int = Field(
        500, ge=1, le=10000,
        description="Page views processed per backfill chunk"
    )
    BACKFILL_SEEN_SESSIONS_CAP: int = Field(
        10000, ge=1,
        description="Most recent session ids carried between backfill chunks"
    )

    # Scheduler Settings
    SCHEDULER_ENABLED: bool = Field(True, description="Run the background scheduler")
    CLEANUP_INTERVAL_MINUTES: int = Field(
        5, ge=1,
        description="Interval of the stale session sweep"
    )

    # Logging Settings
    LOG_LEVEL: str = Field("INFO", description="Logging level")
    LOG_TO_FILE: bool = Field(False, description="Enable file logging")
    LOG_FILE: Path = Field(Path("logs/sitestats.log"), description="Log file path")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v.upper()


# Create global settings instance
settings = Settings()
