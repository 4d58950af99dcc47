"""
Configuration settings for the exercise parser.

Uses Pydantic Settings for environment variable management with .env file support.
Every variable is prefixed with ``MDEXERCISES_`` (e.g. ``MDEXERCISES_DEFAULT_LANGUAGE``).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Parser settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MDEXERCISES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Code blocks
    # ========================================
    default_language: str = Field(
        default="rust",
        description="Language used when neither the directive nor the code fence names one",
    )

    # ========================================
    # Rubrics
    # ========================================
    expected_weight_total: int = Field(
        default=100,
        description="Conventional sum of rubric criterion weights",
    )
    enforce_weight_sum: bool = Field(
        default=False,
        description="Reject rubrics whose weights do not add up to expected_weight_total",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Minimum level for CLI log output",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
