"""resultmonad - Explicit success/failure values instead of control-flow exceptions.

A Result is either a success carrying a value or a failure carrying an error.
Callers inspect the outcome, or thread it through combinators, instead of
wrapping calls in try/except.

Quick Start:
    >>> from resultmonad import Result, NotFoundError
    >>>
    >>> def find_user(user_id: str) -> Result[dict, NotFoundError]:
    ...     user = USERS.get(user_id)
    ...     return Result.ok(user) if user else Result.fail(NotFoundError("User", user_id))
    >>>
    >>> find_user("42").map(lambda u: u["name"]).get_or_else("unknown")
    'unknown'

Typed Errors With Cause Chains:
    >>> db = TechnicalError("Database connection failed", ConnectionError("refused"))
    >>> err = BusinessRuleError("Cannot process user request", NotFoundError("User", "123", db))
    >>> print(err.stack)  # every message of the chain, joined by "Caused by:"

Async Helpers:
    >>> from resultmonad import retry, try_catch_async
    >>>
    >>> async def fetch() -> Result[bytes, Exception]:
    ...     return await try_catch_async(client.get, "https://api.example.com/data")
    >>>
    >>> result = await retry(fetch, retries=3, initial_delay_ms=300)
    >>> result.to_json()
    {'success': True, 'value': ...}
"""

from __future__ import annotations

__version__ = "1.0.0"

# Result container
from .foundation.errors import Err, Ok, Result, combine_results, from_predicate

# Errors
from .foundation.errors import (
    BusinessRuleError,
    CancellationError,
    ConcurrencyError,
    ErrorKind,
    ErrorPayload,
    NotFoundError,
    ResultError,
    ResultMisuseError,
    TechnicalError,
    TimeoutError,
    UnauthorizedError,
    ValidationError,
    ensure_error,
    format_trace,
)

# Configuration
from .foundation.config import ResultMonadSettings, clear_settings_cache, configure_logging, get_settings

# Async helpers
from .runtime import ExponentialBackoff, RetryPolicy, promisify_with_result, try_catch_async
from .runtime.retry import retry

__all__ = [
    "__version__",
    # Result
    "Result", "Ok", "Err", "combine_results", "from_predicate",
    # Errors
    "ResultError", "ValidationError", "NotFoundError", "UnauthorizedError", "BusinessRuleError",
    "TechnicalError", "TimeoutError", "ConcurrencyError", "CancellationError",
    "ErrorKind", "ErrorPayload", "ResultMisuseError", "ensure_error", "format_trace",
    # Configuration
    "ResultMonadSettings", "get_settings", "clear_settings_cache", "configure_logging",
    # Async helpers
    "try_catch_async", "promisify_with_result", "retry", "RetryPolicy", "ExponentialBackoff",
]
