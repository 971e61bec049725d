"""Backoff delay calculation for retry attempts.

Attempt numbers are 0-indexed: attempt 0 is the wait before the first retry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Backoff(Protocol):
    """Protocol for backoff delay calculation."""

    def delay(self, attempt: int) -> float:
        """Delay in seconds before retry number ``attempt`` (0-indexed)."""
        ...


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """Deterministic exponential backoff.

    Delay = base * (multiplier ^ attempt), capped at max_delay when set.

    Attributes:
        base: Initial delay in seconds (default: 0.3)
        multiplier: Exponential growth factor (default: 2.0)
        max_delay: Optional cap in seconds
    """

    base: float = 0.3
    multiplier: float = 2.0
    max_delay: float | None = None

    def delay(self, attempt: int) -> float:
        d = self.base * (self.multiplier ** attempt)
        return d if self.max_delay is None else min(d, self.max_delay)
