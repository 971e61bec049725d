"""Serialization shapes and trace formatting for errors.

Uses Pydantic models for the stable error projection of ``Result.to_json()``.
"""

from __future__ import annotations

import traceback
from io import StringIO
from typing import TYPE_CHECKING, Any, Annotated, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .errors import ErrorKind

# ═══════════════════════════════════════════════════════════════════════════════
# Type Aliases
# ═══════════════════════════════════════════════════════════════════════════════

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]  # Any for recursive slots
JsonDict = dict[str, Any]

_CAUSED_BY = "\nCaused by: "


# ═══════════════════════════════════════════════════════════════════════════════
# Error Projection
# ═══════════════════════════════════════════════════════════════════════════════


class ErrorPayload(BaseModel):
    """Transport-safe view of an error: its ``name`` tag and ``message``. Never the cause."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", revalidate_instances="never",
        json_schema_extra={"title": "Error Payload", "examples": [{"name": "NotFoundError", "message": "Not Found: User could not be found"}]},
    )

    name: Annotated[str, Field(min_length=1)]
    message: str

    @property
    def kind(self) -> ErrorKind | None:
        """Kind of the serialized error, or None for native exception names."""
        from .errors import ErrorKind
        return ErrorKind.of(self.name)

    def is_a(self, kind: ErrorKind | str) -> bool:
        """Is-a check on the name tag alone (TimeoutError is-a TechnicalError)."""
        own = self.kind
        return own is not None and own.is_a(kind)

    def to_dict(self) -> JsonDict:
        """The ``{name, message}`` dict used by ``Result.to_json()``."""
        return self.model_dump()

    @classmethod
    def from_error(cls, error: BaseException) -> ErrorPayload:
        """Project an exception (typed or native). Bypasses validation on this hot path."""
        return cls.model_construct(name=error_name(error), message=error_message(error))


def error_name(error: BaseException) -> str:
    """Kind tag for typed errors, class name for native ones."""
    name = getattr(type(error), "name", None)  # class-level tag; ImportError.name is per-instance
    return name if isinstance(name, str) and name else type(error).__name__


def error_message(error: BaseException) -> str:
    message = getattr(error, "message", None)
    return message if isinstance(message, str) else str(error)


# ═══════════════════════════════════════════════════════════════════════════════
# Trace Formatting
# ═══════════════════════════════════════════════════════════════════════════════


def format_trace(error: BaseException) -> str:
    """Render ``error`` and its whole cause chain.

    Each link is ``Name: message`` plus its traceback frames when it has been
    raised, separated by ``Caused by:``. Typed errors follow ``cause``; native
    exceptions follow ``__cause__``.
    """
    buf = StringIO()
    seen: set[int] = set()
    current: BaseException | None = error
    first = True
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if not first:
            buf.write(_CAUSED_BY)
        buf.write(f"{error_name(current)}: {error_message(current)}")
        if current.__traceback__ is not None:
            buf.write("\n")
            buf.write("".join(traceback.format_tb(current.__traceback__)).rstrip("\n"))
        cause = getattr(current, "cause", None)
        current = cause if isinstance(cause, BaseException) else current.__cause__
        first = False
    return buf.getvalue()
