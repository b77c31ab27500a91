"""
Configuration settings for quizbank.

Uses Pydantic Settings for environment variable management with .env file support.
All variables are prefixed with QUIZBANK_ (e.g. QUIZBANK_SHUFFLE_SEED=42).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QUIZBANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Scoring
    # ========================================
    default_scoring: str = Field(
        default="all_or_nothing",
        description="Registered scoring function used when none is passed",
    )

    # ========================================
    # Sessions
    # ========================================
    shuffle_seed: int | None = Field(
        default=None,
        description="Seed for the bank's RNG (None for a fresh random seed)",
    )
    shuffle_pool_in_place: bool = Field(
        default=True,
        description="Reorder the pool itself when generating a session (False shuffles a copy)",
    )

    # ========================================
    # Question Bank
    # ========================================
    flag_multiple_answers_worth: bool = Field(
        default=True,
        description="Log a warning for multiple-answer questions whose worth is not 1",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
