"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every setting can be overridden with an EXPENSE_TRACKER_* variable
or a line in a local .env file.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Data files
    data_dir: Path = Field(
        default=Path("."),
        description="Directory holding the JSON data files"
    )
    expenses_file: str = Field(
        default="expenses.json",
        min_length=1,
        description="File name of the expenses collection"
    )
    budgets_file: str = Field(
        default="budgets.json",
        min_length=1,
        description="File name of the budgets collection"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for diagnostic logs on stderr"
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON lines instead of console text"
    )

    # Output formatting
    currency_symbol: str = Field(
        default="$",
        description="Symbol printed in front of amounts in summaries"
    )
    date_format: str = Field(
        default="%Y-%m-%d",
        description="strftime format for dates in listings and exports"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept level names the logging module knows."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def expenses_path(self) -> Path:
        """Full path of the expenses file."""
        return self.data_dir / self.expenses_file

    @property
    def budgets_path(self) -> Path:
        """Full path of the budgets file."""
        return self.data_dir / self.budgets_file


@lru_cache()
def get_settings() -> TrackerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return TrackerSettings()
