"""Helpers that operate over ``Result`` values rather than inside them."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fallible.result import Err, Ok

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from fallible.result import Result

__all__ = ["collect", "is_result", "match", "wrap", "wrap_async"]

logger = logging.getLogger(__name__)


def wrap[**P, T](
    op: Callable[P, T], *args: P.args, **kwargs: P.kwargs
) -> Result[T, Exception]:
    """Call ``op`` and capture its outcome as a ``Result``.

    Returns ``Ok`` with the return value, or ``Err`` holding the raised
    exception object itself. Only ``Exception`` subclasses are captured;
    ``KeyboardInterrupt``, ``SystemExit`` and cancellation propagate.

    Example:
        port = wrap(int, raw_port).unwrap_or(8080)
    """
    try:
        value = op(*args, **kwargs)
    except Exception as exc:
        logger.debug("Wrapped call %s raised %s", _name_of(op), type(exc).__name__)
        return Err(exc)
    return Ok(value)


async def wrap_async[**P, T](
    op: Callable[P, Awaitable[T]], *args: P.args, **kwargs: P.kwargs
) -> Result[T, Exception]:
    """Await ``op(*args, **kwargs)`` and capture its outcome as a ``Result``.

    The coroutine completes once the awaited operation settles: ``Ok`` with
    its value, or ``Err`` with the exception it raised (including one raised
    by ``op`` before it produced an awaitable). ``asyncio.CancelledError`` is
    not converted; cancellation propagates to the caller. Timeouts applied
    inside ``op`` surface as ``TimeoutError`` and become ``Err`` like any
    other failure.
    """
    try:
        value = await op(*args, **kwargs)
    except Exception as exc:
        logger.debug(
            "Wrapped awaitable %s raised %s", _name_of(op), type(exc).__name__
        )
        return Err(exc)
    return Ok(value)


def is_result(val: object) -> bool:
    """Return True iff ``val`` is an ``Ok`` or an ``Err``."""
    return isinstance(val, (Ok, Err))


def match[T, E](
    result: Result[T, E],
    on_ok: Callable[[T], Any] | None = None,
    on_err: Callable[[E], Any] | None = None,
) -> Any:
    """Dispatch on the variant of ``result``.

    The matching handler receives the unwrapped payload (``value`` for ``Ok``,
    ``error`` for ``Err``) and its return value is returned. A missing handler
    yields ``None``. At most one handler is ever called.

    Raises:
        TypeError: ``result`` is not a ``Result``.
    """
    if isinstance(result, Ok):
        return on_ok(result.value) if on_ok is not None else None
    if isinstance(result, Err):
        return on_err(result.error) if on_err is not None else None
    raise TypeError(f"match() expects Ok or Err, got {type(result).__name__}")


def collect[T, E](results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Turn an iterable of results into a result of a list.

    Stops at the first ``Err`` and returns it; remaining items are not
    consumed.
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)


def _name_of(op: object) -> str:
    return getattr(op, "__qualname__", None) or type(op).__name__
