"""Tests for environment-based settings and logging configuration."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from resultmonad import clear_settings_cache, configure_logging, get_settings


@pytest.fixture(autouse=True)
def clean_settings() -> object:
    """Reset cached settings around each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


def test_defaults() -> None:
    settings = get_settings()
    assert settings.retry.retries == 3
    assert settings.retry.initial_delay_ms == 300.0
    assert settings.retry.multiplier == 2.0
    assert settings.logging.level == "WARNING"
    assert settings.logging.retry_attempts is True


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTMONAD_RETRY_RETRIES", "5")
    monkeypatch.setenv("RESULTMONAD_LOG_LEVEL", "debug")
    monkeypatch.setenv("RESULTMONAD_LOG_RETRY_ATTEMPTS", "false")

    settings = get_settings()
    assert settings.retry.retries == 5
    assert settings.logging.level == "DEBUG"
    assert settings.logging.retry_attempts is False


def test_invalid_env_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTMONAD_RETRY_RETRIES", "-1")
    with pytest.raises(PydanticValidationError):
        get_settings()


def test_configure_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    log = logging.getLogger("resultmonad")
    original = log.level
    try:
        assert configure_logging("info").level == logging.INFO

        monkeypatch.setenv("RESULTMONAD_LOG_LEVEL", "ERROR")
        clear_settings_cache()
        assert configure_logging().level == logging.ERROR
    finally:
        log.setLevel(original)
