"""
Configuration Management for the Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Limits used by the form validator and sizes used by the dashboard live here
so they are validated once at startup.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local expense storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_path: Path = Field(
        default=Path("~/.expense_tracker/expenses.json"),
        description="JSON file holding the expense list"
    )
    seed_sample_data: bool = Field(
        default=True,
        description="Start with demo expenses when no data file exists yet"
    )

    @field_validator('data_path')
    @classmethod
    def expand_home(cls, v: Path) -> Path:
        """Expand ~ so the path works regardless of the caller's cwd."""
        return v.expanduser()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )

    # Display
    currency_code: str = Field(
        default="EUR",
        min_length=3,
        max_length=3,
        description="ISO currency code used when formatting amounts"
    )

    # Form validation limits
    max_expense_amount: float = Field(
        default=1_000_000.0,
        gt=0,
        description="Largest amount a single expense may have"
    )
    description_min_length: int = Field(
        default=2,
        ge=1,
        description="Minimum trimmed description length"
    )
    description_max_length: int = Field(
        default=200,
        ge=1,
        description="Maximum description length"
    )

    # Dashboard
    recent_expenses_count: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Number of recent expenses on the dashboard"
    )
    trend_months: int = Field(
        default=6,
        ge=1,
        le=24,
        description="Number of months in the spending trend chart"
    )

    # Export
    export_filename: str = Field(
        default="expenses.csv",
        description="File name offered for CSV downloads"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Note: These are loaded lazily to allow partial configuration

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    `<name>_error` entry for each failure.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
