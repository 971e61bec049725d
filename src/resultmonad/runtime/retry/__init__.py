"""Retry for Result-returning operations.

Example:
    >>> from resultmonad.runtime.retry import retry
    >>>
    >>> async def fetch() -> Result[dict, Exception]:
    ...     return await try_catch_async(client.get, "/data")
    >>>
    >>> result = await retry(fetch, retries=5, initial_delay_ms=1000)
"""

from .backoff import Backoff, ExponentialBackoff
from .policy import RetryPolicy, retry

__all__ = [
    "Backoff",
    "ExponentialBackoff",
    "RetryPolicy",
    "retry",
]
