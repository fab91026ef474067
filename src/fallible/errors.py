"""Exception hierarchy for fallible."""

from __future__ import annotations

from typing import Any


class FallibleError(Exception):
    """Base exception for all fallible errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class UnwrapError(FallibleError):
    """A success payload was requested from an ``Err``.

    Raised by ``unwrap()`` and ``expect()``. The held error payload is kept
    unchanged on ``error``; when it is an exception it is also chained as
    ``__cause__`` so tracebacks show where the failure came from.
    """

    def __init__(
        self,
        message: str,
        *,
        error: Any,
        trace: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.error = error
        self.trace = trace
        if isinstance(error, BaseException):
            self.__cause__ = error


class ExpectErrError(FallibleError):
    """An error payload was requested from an ``Ok``."""

    def __init__(self, message: str, *, value: Any, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.value = value


class ConfigurationError(FallibleError):
    """Settings validation or resolution failed."""
