"""fallible: a Result type for explicit, exception-free error handling.

Public API:
    - Ok / Err / Result: the two variants and their union
    - ok() / err(): canonical constructors
    - wrap() / wrap_async(): capture a call's outcome as a Result
    - is_result() / match() / collect(): helpers over Results
    - Settings / get_settings() / settings_scope(): Err diagnostics settings
"""

from __future__ import annotations

import logging

from fallible.config import Settings, get_settings, reload_settings, settings_scope
from fallible.errors import (
    ConfigurationError,
    ExpectErrError,
    FallibleError,
    UnwrapError,
)
from fallible.helpers import collect, is_result, match, wrap, wrap_async
from fallible.result import Err, Ok, Result, err, ok

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("fallible")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("fallible").addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "Err",
    "ExpectErrError",
    "FallibleError",
    "Ok",
    "Result",
    "Settings",
    "UnwrapError",
    "collect",
    "err",
    "get_settings",
    "is_result",
    "match",
    "ok",
    "reload_settings",
    "settings_scope",
    "wrap",
    "wrap_async",
]
