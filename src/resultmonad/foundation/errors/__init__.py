"""Error handling core for resultmonad.

- Result/Ok/Err: Immutable success/failure container with combinators
- ResultError hierarchy: Typed failure kinds with cause chains
- ErrorKind: Name-tag dispatch with explicit is-a membership
- ErrorPayload: Stable {name, message} projection used by Result.to_json()
- ResultMisuseError: Raised for wrong-state access, never carried in a Result
"""

from .errors import (
    BusinessRuleError,
    CancellationError,
    ConcurrencyError,
    ErrorKind,
    NotFoundError,
    ResultError,
    ResultMisuseError,
    TechnicalError,
    TimeoutError,
    UnauthorizedError,
    ValidationError,
    ensure_error,
)
from .result import Err, Ok, Result, combine_results, from_predicate
from .types import ErrorPayload, JsonDict, JsonValue, error_message, error_name, format_trace

__all__ = [
    # Result container
    "Result", "Ok", "Err",
    # Collection ops
    "combine_results", "from_predicate",
    # Error hierarchy
    "ResultError", "ValidationError", "NotFoundError", "UnauthorizedError", "BusinessRuleError",
    "TechnicalError", "TimeoutError", "ConcurrencyError", "CancellationError",
    # Dispatch & misuse
    "ErrorKind", "ResultMisuseError", "ensure_error",
    # Serialization
    "ErrorPayload", "JsonDict", "JsonValue", "error_name", "error_message", "format_trace",
]
