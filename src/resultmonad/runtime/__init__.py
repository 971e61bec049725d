"""Async helpers layered on the Result core: interop bridges and retry.

The ``retry`` coroutine lives in the ``retry`` subpackage and is re-exported
from the package root; binding it here would hide the subpackage itself.
"""

from .interop import promisify_with_result, try_catch_async
from .retry import Backoff, ExponentialBackoff, RetryPolicy

__all__ = [
    # Interop
    "try_catch_async",
    "promisify_with_result",
    # Retry
    "RetryPolicy",
    "Backoff",
    "ExponentialBackoff",
]
