"""Bridges from exception- and callback-based code into Results.

    - try_catch_async: Run a sync or async callable, capture its outcome
    - promisify_with_result: Adapt a ``fn(*args, callback)`` API into an awaitable Result

Neither helper raises an Exception for a failed operation: the failure comes
back inside the Result. ``asyncio.CancelledError`` is not an Exception and
keeps propagating, so task cancellation still works.

Example:
    >>> result = await try_catch_async(fetch_user, user_id)
    >>> result.map(lambda user: user.name).get_or_else("anonymous")

    >>> def read_config(path, callback):
    ...     callback(None, {"path": path})
    >>> await promisify_with_result(read_config, "app.toml")
    Ok({'path': 'app.toml'})
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Callable, TypeVar

from resultmonad.foundation.errors import Err, Ok, Result, ensure_error

if TYPE_CHECKING:
    from collections.abc import Awaitable

T = TypeVar("T")

logger = logging.getLogger("resultmonad.interop")


async def try_catch_async(
    fn: Callable[..., Awaitable[T] | T],
    *args: object,
    **kwargs: object,
) -> Result[T, BaseException]:
    """Call ``fn`` and await its result if needed.

    A raise before the first await, a raise inside the coroutine, or a failed
    future all become ``Err``; normal completion becomes ``Ok``.
    """
    try:
        out = fn(*args, **kwargs)
        return Ok(await out if inspect.isawaitable(out) else out)  # type: ignore[arg-type]
    except Exception as e:
        return Err(ensure_error(e))


async def promisify_with_result(fn: Callable[..., object], *args: object) -> Result[T, BaseException]:
    """Call ``fn(*args, callback)`` and wait for ``callback(error, result)``.

    The callback may fire synchronously, later on the event loop, or from
    another thread. Only the first invocation counts; a non-None ``error``
    (coerced into an exception) produces ``Err``.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Result[T, BaseException]] = loop.create_future()

    def settle(outcome: Result[T, BaseException]) -> None:
        if future.done():
            logger.debug(f"Ignoring extra callback from {_name(fn)}: {outcome!r}")
            return
        future.set_result(outcome)

    def callback(error: object = None, result: object = None) -> None:
        outcome: Result[T, BaseException] = Ok(result) if error is None else Err(ensure_error(error))  # type: ignore[arg-type]
        loop.call_soon_threadsafe(settle, outcome)

    try:
        fn(*args, callback)
    except Exception as e:
        # Queued behind any callback fn already fired, so the first outcome wins
        loop.call_soon(settle, Err(e))
    return await future


def _name(fn: Callable[..., object]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)
