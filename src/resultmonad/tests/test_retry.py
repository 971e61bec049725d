"""Tests for retry with exponential backoff."""

from __future__ import annotations

import inspect
import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from resultmonad import (
    Err,
    ExponentialBackoff,
    Ok,
    Result,
    RetryPolicy,
    TechnicalError,
    clear_settings_cache,
    retry,
)
from resultmonad.runtime.retry import policy as retry_policy


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record retry waits instead of sleeping."""
    recorded: list[float] = []

    async def fake_sleep(delay: float) -> None:
        recorded.append(delay)

    monkeypatch.setattr(retry_policy.asyncio, "sleep", fake_sleep)
    return recorded


@pytest.fixture(autouse=True)
def clean_settings() -> object:
    clear_settings_cache()
    yield
    clear_settings_cache()


def _always_failing(calls: list[TechnicalError]):
    async def attempt() -> Result[int, TechnicalError]:
        error = TechnicalError(f"attempt {len(calls) + 1}")
        calls.append(error)
        return Err(error)
    return attempt


@pytest.mark.asyncio
async def test_retry_exhausts_budget(sleeps: list[float]) -> None:
    """retries=3 means 4 attempts; the last failure comes back unchanged."""
    calls: list[TechnicalError] = []

    result = await retry(_always_failing(calls), retries=3, initial_delay_ms=100)

    assert len(calls) == 4
    assert result.error is calls[-1]
    assert sleeps == [0.1, 0.2, 0.4]


@pytest.mark.asyncio
async def test_retry_stops_on_success(sleeps: list[float]) -> None:
    outcomes = iter([Err(TechnicalError("flaky")), Err(TechnicalError("flaky")), Ok("data")])
    calls = 0

    async def attempt() -> Result[str, TechnicalError]:
        nonlocal calls
        calls += 1
        return next(outcomes)

    result = await retry(attempt, retries=5, initial_delay_ms=10)

    assert result.value == "data"
    assert calls == 3
    assert sleeps == [0.01, 0.02]


@pytest.mark.asyncio
async def test_retry_first_success_never_sleeps(sleeps: list[float]) -> None:
    result = await retry(lambda: Ok(1), retries=3, initial_delay_ms=100)
    assert result.value == 1
    assert sleeps == []


@pytest.mark.asyncio
async def test_retry_zero_retries(sleeps: list[float]) -> None:
    calls: list[TechnicalError] = []
    result = await retry(_always_failing(calls), retries=0)

    assert len(calls) == 1
    assert result.error is calls[0]
    assert sleeps == []


@pytest.mark.asyncio
async def test_retry_on_retry_observer(sleeps: list[float]) -> None:
    calls: list[TechnicalError] = []
    events: list[tuple[int, str, float]] = []

    await retry(
        _always_failing(calls),
        policy=RetryPolicy(retries=2, initial_delay_ms=50),
        on_retry=lambda n, err, delay: events.append((n, err.message, delay)),
    )

    assert events == [
        (2, "Technical Error: attempt 1", 0.05),
        (3, "Technical Error: attempt 2", 0.1),
    ]


@pytest.mark.asyncio
async def test_retry_uses_settings_defaults(sleeps: list[float], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTMONAD_RETRY_RETRIES", "2")
    monkeypatch.setenv("RESULTMONAD_RETRY_INITIAL_DELAY_MS", "1000")
    clear_settings_cache()
    calls: list[TechnicalError] = []

    await retry(_always_failing(calls))

    assert len(calls) == 3
    assert sleeps == [1.0, 2.0]


@pytest.mark.asyncio
async def test_retry_logs_attempts(sleeps: list[float], caplog: pytest.LogCaptureFixture) -> None:
    calls: list[TechnicalError] = []
    with caplog.at_level(logging.INFO, logger="resultmonad.retry"):
        await retry(_always_failing(calls), retries=1, initial_delay_ms=10)

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Retry 2/2") and "TechnicalError" in m for m in messages)
    assert any("Giving up after 2 attempts" in m for m in messages)


@pytest.mark.asyncio
async def test_retry_exception_in_fn_propagates(sleeps: list[float]) -> None:
    async def broken() -> Result[int, Exception]:
        raise RuntimeError("not wrapped")

    with pytest.raises(RuntimeError, match="not wrapped"):
        await retry(broken, retries=2)


def test_policy_validation() -> None:
    with pytest.raises(PydanticValidationError):
        RetryPolicy(retries=-1)
    with pytest.raises(PydanticValidationError):
        RetryPolicy(initial_delay_ms=-5)


def test_policy_schedule() -> None:
    policy = RetryPolicy(retries=3, initial_delay_ms=100)
    assert policy.total_attempts == 4
    assert [policy.delay(i) for i in range(3)] == [0.1, 0.2, 0.4]


def test_exponential_backoff_cap() -> None:
    backoff = ExponentialBackoff(base=1.0, max_delay=3.0)
    assert [backoff.delay(i) for i in range(4)] == [1.0, 2.0, 3.0, 3.0]


def test_retry_subpackage_is_reachable() -> None:
    """The runtime package exposes the retry subpackage, not the coroutine."""
    import resultmonad.runtime

    assert inspect.ismodule(resultmonad.runtime.retry)
    assert resultmonad.runtime.retry.retry is retry


@pytest.mark.asyncio
async def test_retry_explicit_policy_ignores_broken_env(
    sleeps: list[float], monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """A malformed env var only matters when a default is actually needed."""
    monkeypatch.setenv("RESULTMONAD_RETRY_RETRIES", "-1")
    clear_settings_cache()
    caplog.set_level(logging.WARNING, logger="resultmonad.retry")
    calls: list[TechnicalError] = []

    result = await retry(_always_failing(calls), policy=RetryPolicy(retries=1, initial_delay_ms=100))
    assert len(calls) == 2
    assert result.error is calls[-1]

    result = await retry(_always_failing(calls), retries=1, initial_delay_ms=100)
    assert len(calls) == 4
    assert sleeps == [0.1, 0.1]

    with pytest.raises(PydanticValidationError):
        await retry(_always_failing(calls), initial_delay_ms=100)
