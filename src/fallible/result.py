"""The ``Result`` type: ``Ok`` for success, ``Err`` for failure.

Both variants are frozen dataclasses exposing the same methods, so a
``Result`` can be handled uniformly or destructured with ``match``:

    >>> match parse(text):
    ...     case Ok(value):
    ...         print(f"parsed {value}")
    ...     case Err(error):
    ...         print(f"failed: {error}")

Only ``unwrap``, ``expect``, ``expect_err`` and ``unwrap_err`` raise, and only
when called on the other variant. Every other method is total; exceptions
raised by caller-supplied functions propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from fallible._trace import capture_trace
from fallible.config import diagnostic_settings
from fallible.errors import ExpectErrError, UnwrapError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

__all__ = ["Err", "Ok", "Result", "err", "ok"]

_UNWRAP_HINT = "Check is_ok() first, or use unwrap_or() to supply a fallback."


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful outcome holding ``value``."""

    value: T

    def __iter__(self) -> Iterator[Any]:
        """Iterate the payload's elements; nothing when it is not iterable."""
        if isinstance(self.value, Iterable):
            return iter(self.value)
        return iter(())

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, fallback: object) -> T:
        return self.value

    def unwrap_or_else(self, fallback_fn: Callable[[Any], Any]) -> T:
        return self.value

    def expect(self, msg: str) -> T:
        return self.value

    def expect_err(self, msg: str) -> Any:
        raise ExpectErrError(msg, value=self.value)

    def unwrap_err(self) -> Any:
        raise ExpectErrError(
            f"Tried to unwrap_err an Ok: {self.value}",
            value=self.value,
            hint="Check is_err() first.",
        )

    def map[U](self, mapper: Callable[[T], U]) -> Ok[U]:
        """Return ``Ok(mapper(value))``."""
        return Ok(mapper(self.value))

    def map_err(self, mapper: Callable[[Any], Any]) -> Ok[T]:
        return self

    def and_then[U, F](self, mapper: Callable[[T], Result[U, F]]) -> Result[U, F]:
        """Return ``mapper(value)`` as is; it is already a ``Result``."""
        return mapper(self.value)

    def or_else(self, mapper: Callable[[Any], Any]) -> Ok[T]:
        return self


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed outcome holding ``error``.

    ``trace`` records where the ``Err`` was created when trace capture is
    enabled (see ``fallible.config``). It is diagnostic only: it is left out
    of equality, hashing and ``repr``.
    """

    EMPTY: ClassVar[Err[None]]

    error: E
    trace: str | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.trace is None:
            settings = diagnostic_settings()
            if settings.capture_trace:
                object.__setattr__(self, "trace", capture_trace(settings.trace_limit))

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def _with_trace(self, message: str) -> str:
        return f"{message}\n{self.trace}" if self.trace else message

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise UnwrapError(
            self._with_trace(f"Tried to unwrap an Err: {self.error}"),
            error=self.error,
            trace=self.trace,
            hint=_UNWRAP_HINT,
        )

    def unwrap_or[U](self, fallback: U) -> U:
        return fallback

    def unwrap_or_else[U](self, fallback_fn: Callable[[E], U]) -> U:
        """Return ``fallback_fn(error)``."""
        return fallback_fn(self.error)

    def expect(self, msg: str) -> Any:
        raise UnwrapError(
            self._with_trace(f"{msg} - Error: {self.error}"),
            error=self.error,
            trace=self.trace,
            hint=_UNWRAP_HINT,
        )

    def expect_err(self, msg: str) -> E:
        return self.error

    def unwrap_err(self) -> E:
        return self.error

    def map(self, mapper: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_err[F](self, mapper: Callable[[E], F]) -> Err[F]:
        """Return ``Err(mapper(error))``."""
        return Err(mapper(self.error))

    def and_then(self, mapper: Callable[[Any], Any]) -> Err[E]:
        return self

    def or_else[U, F](self, mapper: Callable[[E], Result[U, F]]) -> Result[U, F]:
        """Return ``mapper(error)`` as is; it is already a ``Result``."""
        return mapper(self.error)


Err.EMPTY = Err(None, trace="")

type Result[T, E] = Ok[T] | Err[E]


def ok[T](value: T) -> Ok[T]:
    """Wrap ``value`` as a success."""
    return Ok(value)


def err[E](error: E) -> Err[E]:
    """Wrap ``error`` as a failure, capturing the creation site if enabled."""
    return Err(error)
