"""
Configuration Management for the Finance Tracker

Uses pydantic-settings for type-safe configuration from environment
variables (prefix `FINANCE_TRACKER_`) and an optional `.env` file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from finance_tracker.scheduling.dates import MONTH_NAMES


class TrackerSettings(BaseSettings):
    """
    Application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Display
    locale: str = Field(
        default="pt-BR",
        description="Locale for long-form display dates"
    )

    # Storage
    storage_path: Optional[str] = Field(
        default=None,
        description="JSON file holding the key-value store; in-memory when unset"
    )
    transactions_key: str = Field(
        default="transactions",
        min_length=1,
        description="Key of the transaction list"
    )
    categories_key: str = Field(
        default="custom_categories",
        min_length=1,
        description="Key of the custom category list"
    )
    audit_key: str = Field(
        default="audit_log",
        min_length=1,
        description="Key of the audit log"
    )

    # Due-date reminders
    due_soon_days: int = Field(
        default=7,
        ge=0,
        le=365,
        description="How many days ahead an installment counts as due soon"
    )

    log_level: str = Field(
        default="INFO",
        description="Standard library logging level"
    )

    @field_validator('locale')
    @classmethod
    def validate_locale(cls, v: str) -> str:
        if v not in MONTH_NAMES:
            raise ValueError(f"Unsupported locale: {v}. Supported: {sorted(MONTH_NAMES)}")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> TrackerSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return TrackerSettings()
