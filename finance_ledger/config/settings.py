"""
Configuration Management for Finance Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The ledger itself has very few knobs: where the settings store lives,
which key holds the document, and which language messages are shown in.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Ledger service settings.

    Loads configuration from LEDGER_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Persistence
    data_key: str = Field(
        default="financeData",
        min_length=1,
        description="Settings-store key holding the serialized document"
    )
    storage_path: str = Field(
        default="finance_settings.json",
        description="Path of the JSON file backing the settings store"
    )

    # Presentation
    language: Literal["en", "ru"] = Field(
        default="en",
        description="Language of error messages and default category names"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level for the ledger loggers"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level, rejecting names logging doesn't know."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get ledger settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
