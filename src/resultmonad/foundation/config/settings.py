"""Environment-based configuration using pydantic-settings.

Provides the defaults for retry and logging, overridable through environment
variables or a .env file.

Example:
    >>> from resultmonad.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.retry.retries
    3

    # Or with environment variables:
    # RESULTMONAD_RETRY_RETRIES=5
    # RESULTMONAD_RETRY_INITIAL_DELAY_MS=1000
    # RESULTMONAD_LOG_LEVEL=INFO
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, NonNegativeFloat, PositiveFloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrySettings(BaseSettings):
    """Default retry configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTMONAD_RETRY_",
        extra="ignore",
    )

    retries: Annotated[int, Field(ge=0, le=20)] = Field(default=3, description="Additional attempts after the first")
    initial_delay_ms: NonNegativeFloat = Field(default=300.0, description="Delay before the second attempt, in ms")
    multiplier: PositiveFloat = Field(default=2.0, description="Exponential backoff base")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTMONAD_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    retry_attempts: bool = Field(default=True, description="Log each retry attempt")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v


class ResultMonadSettings(BaseSettings):
    """Root settings.

    Example environment variables:
        RESULTMONAD_RETRY_RETRIES=5
        RESULTMONAD_RETRY_INITIAL_DELAY_MS=50
        RESULTMONAD_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="RESULTMONAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> ResultMonadSettings:
    """Get the global settings instance (cached)."""
    return ResultMonadSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    The next get_settings() call reloads configuration from the environment.
    """
    get_settings.cache_clear()


def configure_logging(level: str | None = None) -> logging.Logger:
    """Set the level of the ``resultmonad`` logger tree. Handlers are left to the application."""
    log = logging.getLogger("resultmonad")
    log.setLevel((level or get_settings().logging.level).upper())
    return log
