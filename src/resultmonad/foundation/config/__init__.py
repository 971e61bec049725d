"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    LoggingSettings,
    ResultMonadSettings,
    RetrySettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "ResultMonadSettings",
    "RetrySettings",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
