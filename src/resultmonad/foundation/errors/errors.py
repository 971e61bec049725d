"""Typed error hierarchy for Result failures.

Provides a closed vocabulary of failure categories with fixed message templates
and a traceable cause chain:
- ResultError: Base kind carrying an optional cause
- ValidationError, NotFoundError, UnauthorizedError, BusinessRuleError
- TechnicalError with TimeoutError and CancellationError specializations
- ConcurrencyError for optimistic-locking conflicts

Dispatch works two ways: isinstance checks on live errors, or ErrorKind on the
stable ``name`` tag (the only thing serialized errors carry).

Example:
    >>> db = TechnicalError("Database connection failed", ConnectionError("refused"))
    >>> err = NotFoundError("User", "123", db)
    >>> err.message
    "Not Found: User with id '123' could not be found"
    >>> ErrorKind.of(err.cause).is_a(ErrorKind.TECHNICAL)
    True
"""

from __future__ import annotations

from enum import StrEnum
from functools import cached_property
from typing import ClassVar

from .types import format_trace

# Interpreter-managed exception slots that must stay writable for raise/except to work
_MUTABLE_DUNDERS: frozenset[str] = frozenset({
    "__traceback__", "__context__", "__cause__", "__suppress_context__", "__notes__",
})


class ResultMisuseError(RuntimeError):
    """Raised when calling code violates the Result access contract.

    Reading ``value`` on a failure, ``error`` on a success, or building a failure
    without an error. Never carried inside a Result: it signals a bug, not a
    recoverable domain condition.
    """


class ErrorKind(StrEnum):
    """Stable ``name`` tags of the error hierarchy with explicit is-a membership."""

    RESULT = "ResultError"
    VALIDATION = "ValidationError"
    NOT_FOUND = "NotFoundError"
    UNAUTHORIZED = "UnauthorizedError"
    BUSINESS_RULE = "BusinessRuleError"
    TECHNICAL = "TechnicalError"
    TIMEOUT = "TimeoutError"
    CONCURRENCY = "ConcurrencyError"
    CANCELLATION = "CancellationError"

    @property
    def parent(self) -> ErrorKind | None:
        """Direct parent kind (None for the root)."""
        if self is ErrorKind.RESULT:
            return None
        return _TECHNICAL_CHILDREN.get(self, ErrorKind.RESULT)

    def is_a(self, other: ErrorKind | str) -> bool:
        """Whether this kind equals or specializes ``other``."""
        target = ErrorKind(other)
        kind: ErrorKind | None = self
        while kind is not None:
            if kind is target:
                return True
            kind = kind.parent
        return False

    @classmethod
    def of(cls, error: BaseException | str | None) -> ErrorKind | None:
        """Map an error instance or serialized name to its kind. None for native errors."""
        match error:
            case None:
                return None
            case str():
                return cls._value2member_map_.get(error)  # type: ignore[return-value]
            case ResultError():
                for klass in type(error).__mro__:
                    if issubclass(klass, ResultError) and klass.__name__ in cls._value2member_map_:
                        return cls(klass.__name__)
                return cls.RESULT
            case _:
                return None


_TECHNICAL_CHILDREN: dict[ErrorKind, ErrorKind] = {
    ErrorKind.TIMEOUT: ErrorKind.TECHNICAL,
    ErrorKind.CANCELLATION: ErrorKind.TECHNICAL,
}


class ResultError(Exception):
    """Base error kind with an optional causing error.

    The cause is also linked as ``__cause__`` so Python's own traceback output
    shows the chain. ``stack`` renders the full chain once, on first access.

    Attributes:
        message: Human-readable message (already templated by subclasses)
        cause: The error that caused this one, if any
        name: Kind tag, equal to the concrete class name
    """

    name: ClassVar[str] = "ResultError"

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls.name = cls.__name__

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        object.__setattr__(self, "message", message)
        object.__setattr__(self, "cause", cause)
        if cause is not None:
            self.__cause__ = cause
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, key: str, value: object) -> None:
        if key in _MUTABLE_DUNDERS or not getattr(self, "_frozen", False):
            object.__setattr__(self, key, value)
            return
        raise AttributeError(f"{self.name} is immutable; cannot set {key!r}")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{self.name} is immutable; cannot delete {key!r}")

    def __reduce__(self) -> tuple[object, ...]:
        return _restore_error, (type(self), self.args, dict(self.__dict__))

    @cached_property
    def stack(self) -> str:
        """Trace text with a ``Caused by:`` section per link of the cause chain."""
        return format_trace(self)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.name}({self.message!r})"


class ValidationError(ResultError):
    """Input failed validation."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Validation Error: {message}", cause)


class NotFoundError(ResultError):
    """A requested resource does not exist."""

    def __init__(self, resource: str, id: str | None = None, cause: BaseException | None = None) -> None:  # noqa: A002
        object.__setattr__(self, "resource", resource)
        object.__setattr__(self, "id", id)
        target = f"{resource} with id '{id}'" if id is not None else resource
        super().__init__(f"Not Found: {target} could not be found", cause)


class UnauthorizedError(ResultError):
    """Caller lacks permission for the operation."""

    def __init__(self, message: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(f"Unauthorized: {message or 'You are not authorized to perform this operation'}", cause)


class BusinessRuleError(ResultError):
    """A domain rule rejected the operation."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Business Rule Violation: {message}", cause)


class TechnicalError(ResultError):
    """Infrastructure failure (database, network, filesystem...)."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Technical Error: {message}", cause)


class TimeoutError(TechnicalError):  # noqa: A001
    """An operation exceeded its time budget.

    Data carrier only: nothing in this package enforces timeouts.
    """

    def __init__(self, operation_name: str, timeout_ms: float, cause: BaseException | None = None) -> None:
        object.__setattr__(self, "operation_name", operation_name)
        object.__setattr__(self, "timeout_ms", timeout_ms)
        ms = int(timeout_ms) if float(timeout_ms).is_integer() else timeout_ms
        super().__init__(f"Operation '{operation_name}' timed out after {ms}ms", cause)


class ConcurrencyError(ResultError):
    """Optimistic-locking conflict: the resource changed underneath us."""

    def __init__(self, resource: str, id: str | None = None, cause: BaseException | None = None) -> None:  # noqa: A002
        object.__setattr__(self, "resource", resource)
        object.__setattr__(self, "id", id)
        target = f"{resource} with id '{id}'" if id is not None else resource
        super().__init__(f"Concurrency Error: {target} was modified by another process", cause)


class CancellationError(TechnicalError):
    """An operation was aborted. Advisory: carries the fact, does not interrupt anything."""

    def __init__(
        self,
        message: str | None = None,
        operation_id: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        object.__setattr__(self, "operation_id", operation_id)
        # Skip TechnicalError's template: cancellations use their own prefix
        ResultError.__init__(self, f"Cancellation: {message or 'Operation was cancelled'}", cause)


def ensure_error(value: object) -> BaseException:
    """Coerce an arbitrary failure value into an exception object."""
    if isinstance(value, BaseException):
        return value
    if value is None:
        return Exception("Unknown error")
    return Exception(value if isinstance(value, str) else repr(value))


def _restore_error(cls: type[ResultError], args: tuple[object, ...], state: dict[str, object]) -> ResultError:
    """Unpickle/copy hook: rebuild without re-running the templated ``__init__``."""
    error = cls.__new__(cls, *args)
    error.__dict__.update(state)
    if state.get("cause") is not None:
        error.__cause__ = state["cause"]  # type: ignore[assignment]
    return error
