"""Retry of Result-returning operations with exponential backoff.

One initial attempt plus ``retries`` additional attempts. Waits are
cooperative (``asyncio.sleep``) so other tasks keep running. Every failure is
retried regardless of its kind, and the last failure is returned unchanged.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Annotated, Callable, TypeVar

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, PositiveFloat, computed_field

from resultmonad.foundation.config import get_settings
from resultmonad.foundation.errors import error_message, error_name

from .backoff import ExponentialBackoff

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from resultmonad.foundation.errors import Result

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)

logger = logging.getLogger("resultmonad.retry")


class RetryPolicy(BaseModel):
    """Retry budget and backoff schedule.

    Attributes:
        retries: Additional attempts after the first (0 = try once)
        initial_delay_ms: Wait before the second attempt
        multiplier: Growth factor between consecutive waits

    Example:
        >>> policy = RetryPolicy(retries=3, initial_delay_ms=100)
        >>> [policy.delay(i) for i in range(policy.retries)]
        [0.1, 0.2, 0.4]
    """

    model_config = ConfigDict(
        frozen=True,
        validate_default=True,
        extra="forbid",
        revalidate_instances="never",
        json_schema_extra={
            "title": "Retry Policy",
            "examples": [{"retries": 3, "initial_delay_ms": 300, "multiplier": 2.0}],
        },
    )

    retries: Annotated[int, Field(ge=0)] = 3
    initial_delay_ms: NonNegativeFloat = 300.0
    multiplier: PositiveFloat = 2.0

    @computed_field
    @property
    def total_attempts(self) -> int:
        """Initial attempt plus retries."""
        return self.retries + 1

    @property
    def backoff(self) -> ExponentialBackoff:
        return ExponentialBackoff(base=self.initial_delay_ms / 1000, multiplier=self.multiplier)

    def delay(self, attempt: int) -> float:
        """Seconds to wait before retry ``attempt`` (0-indexed)."""
        return self.backoff.delay(attempt)

    @classmethod
    def from_settings(cls, retries: int | None = None, initial_delay_ms: float | None = None) -> RetryPolicy:
        """Build from explicit values, falling back to configured defaults.

        Settings are only read when a value is missing; two explicit values give
        the plain doubling schedule.
        """
        if retries is not None and initial_delay_ms is not None:
            return cls(retries=retries, initial_delay_ms=initial_delay_ms)
        cfg = get_settings().retry
        return cls(
            retries=cfg.retries if retries is None else retries,
            initial_delay_ms=cfg.initial_delay_ms if initial_delay_ms is None else initial_delay_ms,
            multiplier=cfg.multiplier,
        )


async def retry(
    fn: Callable[[], Awaitable[Result[T, E]] | Result[T, E]],
    retries: int | None = None,
    initial_delay_ms: float | None = None,
    *,
    policy: RetryPolicy | None = None,
    on_retry: Callable[[int, E, float], None] | None = None,
) -> Result[T, E]:
    """Call ``fn`` until it succeeds or the retry budget is spent.

    Args:
        fn: Zero-arg callable returning a Result (or an awaitable of one)
        retries: Additional attempts after the first (default from settings)
        initial_delay_ms: Wait before the second attempt; doubles afterwards
        policy: Full policy; overrides retries/initial_delay_ms when given
        on_retry: Observer called as (next_attempt, error, delay_seconds) before each wait

    Returns:
        First successful Result, or the last failure unchanged
    """
    if policy is None:
        policy = RetryPolicy.from_settings(retries, initial_delay_ms)
    log_attempts: bool | None = None

    result = await _call(fn)
    attempt = 0
    while result.is_err() and attempt < policy.retries:
        error = result.error
        delay = policy.delay(attempt)
        if log_attempts is None:
            log_attempts = logger.isEnabledFor(logging.INFO) and get_settings().logging.retry_attempts
        if log_attempts:
            logger.info(
                f"Retry {attempt + 2}/{policy.total_attempts} after {delay:.3g}s "
                f"({error_name(error)}: {error_message(error)})"
            )
        if on_retry:
            on_retry(attempt + 2, error, delay)
        await asyncio.sleep(delay)
        result = await _call(fn)
        attempt += 1

    if result.is_err() and policy.retries:
        logger.warning(f"Giving up after {policy.total_attempts} attempts ({error_name(result.error)})")
    return result


async def _call(fn: Callable[[], Awaitable[Result[T, E]] | Result[T, E]]) -> Result[T, E]:
    out = fn()
    return await out if inspect.isawaitable(out) else out  # type: ignore[return-value]
