"""Result monad for explicit, exception-free error handling.

Implements an immutable discriminated union for success/failure:
- Constructors: ok, fail, from_throwable, from_awaitable
- Functor: map, map_error
- Monad: flat_map (bind)
- Side effects: tap, tap_error
- Recovery: recover, or_else, get_or_else, get_or_call
- Async bridging: async_map, async_flat_map, to_awaitable
- Stable projection: to_json, dumps

Performance notes:
- Uses __slots__ for minimal memory footprint
- Pass-through branches return self instead of allocating
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

import orjson
from pydantic import BaseModel

from .errors import ResultMisuseError, ensure_error
from .types import ErrorPayload, JsonDict

if TYPE_CHECKING:
    from collections.abc import Awaitable, Iterable, Iterator

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)
U = TypeVar("U")
F = TypeVar("F", bound=BaseException)

_OK = True
_ERR = False


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Err).

    Exactly one payload slot is populated and instances never change after
    construction: every combinator returns a new Result (or ``self`` when it
    passes through untouched).

    Examples:
        >>> Result.ok(42).map(lambda x: x * 2).value
        84
        >>> Result.fail(ValueError("boom")).map(lambda x: x * 2).error
        ValueError('boom')
        >>> Result.ok(5).flat_map(lambda x: Ok(x * 2) if x > 0 else Err(ValueError("neg"))).value
        10
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        """Private constructor. Use Result.ok()/Result.fail() or Ok()/Err()."""
        if not is_ok and value is None:
            raise ResultMisuseError("A failed Result requires an error")
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_is_ok", is_ok)

    def __setattr__(self, key: str, value: object) -> None:
        raise AttributeError(f"Result is immutable; cannot set {key!r}")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"Result is immutable; cannot delete {key!r}")

    def __reduce__(self) -> tuple[object, ...]:
        return Result, (self._value, self._is_ok)

    # ─── Construction ────────────────────────────────────────────────

    @classmethod
    def ok(cls, value: T = None) -> Result[T, Any]:  # type: ignore[assignment]
        """Success wrapping ``value`` (None when omitted)."""
        return cls(value, _OK)

    @classmethod
    def fail(cls, error: E) -> Result[Any, E]:
        """Failure wrapping ``error``. Raises ResultMisuseError if error is None."""
        return cls(error, _ERR)

    @classmethod
    def from_throwable(cls, fn: Callable[..., T], *args: object, **kwargs: object) -> Result[T, Exception]:
        """Call ``fn`` now; its return becomes Ok, a raised Exception becomes Err."""
        try:
            return cls(fn(*args, **kwargs), _OK)
        except Exception as e:
            return cls(e, _ERR)

    @classmethod
    async def from_awaitable(cls, awaitable: Awaitable[T]) -> Result[T, Exception]:
        """Await ``awaitable``; never raises an Exception, the outcome is carried in the Result."""
        try:
            return cls(await awaitable, _OK)
        except Exception as e:
            return cls(ensure_error(e), _ERR)

    # ─── State ───────────────────────────────────────────────────────

    @property
    def succeeded(self) -> bool:
        """Discriminant: True for Ok, False for Err."""
        return self._is_ok

    def is_ok(self) -> bool:
        """Check if Result is Ok variant."""
        return self._is_ok

    def is_err(self) -> bool:
        """Check if Result is Err variant."""
        return not self._is_ok

    @property
    def value(self) -> T:
        """Ok payload. Raises ResultMisuseError on Err."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise ResultMisuseError(f"Cannot read value of a failed Result: {self._value!r}")

    @property
    def error(self) -> E:
        """Err payload. Raises ResultMisuseError on Ok."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise ResultMisuseError("Cannot read error of a successful Result")

    # ─── Functor / Monad ─────────────────────────────────────────────

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        """Apply fn to the Ok value. Exceptions from fn propagate to the caller."""
        return Result(fn(self._value), _OK) if self._is_ok else self  # type: ignore[arg-type,return-value]

    def flat_map(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind (>>=). Chain operations that can fail.

        Example:
            >>> Ok("42").flat_map(lambda s: Ok(int(s))).flat_map(lambda n: Ok(n * 2) if n > 0 else Err(ValueError("neg")))
            Ok(84)
        """
        return fn(self._value) if self._is_ok else self  # type: ignore[arg-type,return-value]

    def and_then(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Alias for flat_map."""
        return fn(self._value) if self._is_ok else self  # type: ignore[arg-type,return-value]

    def map_error(self, fn: Callable[[E], F]) -> Result[T, F]:
        """Apply fn to the Err value. Ok passes through."""
        return Result(fn(self._value), _ERR) if not self._is_ok else self  # type: ignore[arg-type,return-value]

    # ─── Side Effects ────────────────────────────────────────────────

    def tap(self, fn: Callable[[T], object]) -> Result[T, E]:
        """Call fn with the Ok value, return self. Exceptions from fn are not caught."""
        if self._is_ok:
            fn(self._value)  # type: ignore[arg-type]
        return self

    def tap_error(self, fn: Callable[[E], object]) -> Result[T, E]:
        """Call fn with the Err value, return self."""
        if not self._is_ok:
            fn(self._value)  # type: ignore[arg-type]
        return self

    # ─── Pattern Matching & Extraction ───────────────────────────────

    def match(self, on_success: Callable[[T], U], on_failure: Callable[[E], U]) -> U:
        """Exhaustive case analysis: exactly one branch runs."""
        return on_success(self._value) if self._is_ok else on_failure(self._value)  # type: ignore[arg-type]

    def get_or_else(self, default: T) -> T:
        """Ok value, or ``default`` on Err."""
        return self._value if self._is_ok else default  # type: ignore[return-value]

    def get_or_call(self, fn: Callable[[E], T]) -> T:
        """Ok value, or fallback computed from the error."""
        return self._value if self._is_ok else fn(self._value)  # type: ignore[return-value,arg-type]

    # ─── Recovery ────────────────────────────────────────────────────

    def recover(self, fn: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """On Err, replace with fn(error). On Ok, pass through."""
        return fn(self._value) if not self._is_ok else self  # type: ignore[arg-type,return-value]

    def or_else(self, alternative: Result[T, F]) -> Result[T, F]:
        """On Err, return the (already evaluated) alternative. On Ok, pass through."""
        return alternative if not self._is_ok else self  # type: ignore[return-value]

    # ─── Async Bridging ──────────────────────────────────────────────

    async def async_map(self, fn: Callable[[T], Awaitable[U] | U]) -> Result[U, E]:
        """Async map: awaits fn's result when it is awaitable. Err short-circuits."""
        if not self._is_ok:
            return self  # type: ignore[return-value]
        return Result(await _settle(fn(self._value)), _OK)  # type: ignore[arg-type]

    async def async_flat_map(self, fn: Callable[[T], Awaitable[Result[U, E]] | Result[U, E]]) -> Result[U, E]:
        """Async bind: fn yields (an awaitable of) a Result. Err short-circuits."""
        if not self._is_ok:
            return self  # type: ignore[return-value]
        return await _settle(fn(self._value))  # type: ignore[arg-type]

    async def to_awaitable(self) -> T:
        """Return the value, or raise the error. The one exception-style exit."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise ensure_error(self._value)

    # ─── Projection ──────────────────────────────────────────────────

    def to_json(self) -> JsonDict:
        """``{"success": True, "value": v}`` or ``{"success": False, "error": {"name", "message"}}``.

        The cause chain is never included.
        """
        if self._is_ok:
            return {"success": True, "value": self._value}
        return {"success": False, "error": ErrorPayload.from_error(ensure_error(self._value)).to_dict()}

    def dumps(self) -> str:
        """JSON text of to_json(), encoded with orjson."""
        return orjson.dumps(self.to_json(), default=_json_default, option=orjson.OPT_NON_STR_KEYS).decode()

    # ─── Dunder Methods ──────────────────────────────────────────────

    __bool__ = lambda self: self._is_ok  # noqa: E731
    __hash__ = lambda self: hash((self._is_ok, self._value))  # noqa: E731
    __repr__ = lambda self: f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"  # noqa: E731
    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        return self._is_ok == other._is_ok and self._value == other._value if isinstance(other, Result) else NotImplemented

    def __iter__(self) -> Iterator[T]:
        """Iterate: yields value if Ok, nothing if Err."""
        if self._is_ok:
            yield self._value  # type: ignore[misc]


async def _settle(value: Awaitable[U] | U) -> U:
    return await value if inspect.isawaitable(value) else value  # type: ignore[return-value]


def _json_default(obj: object) -> object:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def Ok(value: T = None) -> Result[T, Any]:  # noqa: N802  # type: ignore[assignment]
    """Construct Ok variant (success)."""
    return Result(value, _OK)


def Err(error: E) -> Result[Any, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, _ERR)


# ═══════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═══════════════════════════════════════════════════════════════════════════════


def combine_results(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Iterable[Result[T,E]] → Result[list[T], E]. Fail-fast on the first Err, order preserved."""
    values: list[T] = []
    for r in results:
        if not r._is_ok:
            return r  # type: ignore[return-value]
        values.append(r._value)  # type: ignore[arg-type]
    return Result(values, _OK)


def from_predicate(value: T, predicate: Callable[[T], bool], error_message: str) -> Result[T, Exception]:
    """Ok(value) if predicate(value) holds, else Err(Exception(error_message))."""
    return Result(value, _OK) if predicate(value) else Result(Exception(error_message), _ERR)
