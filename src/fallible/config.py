"""Settings for the optional ``Err`` diagnostics.

Resolution is resolve-once, freeze-then-flow: defaults, then ``FALLIBLE_*``
environment variables (with ``.env`` support), then explicit overrides are
merged through a single Pydantic schema into an immutable ``Settings``.
``settings_scope`` activates overrides for a block of code without touching
the process-wide resolution.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from functools import cache
import logging
import os
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from fallible.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

__all__ = [
    "ENV_PREFIX",
    "Settings",
    "diagnostic_settings",
    "get_settings",
    "load_env",
    "reload_settings",
    "resolve_settings",
    "settings_scope",
]

logger = logging.getLogger(__name__)

ENV_PREFIX = "FALLIBLE_"


class Settings(BaseModel):
    """Schema, defaults and validation for fallible settings."""

    #: Record a creation-site trace on every ``Err``.
    capture_trace: bool = Field(default=True)
    #: Maximum number of stack frames kept in a captured trace.
    trace_limit: int = Field(default=10, ge=1)

    model_config = {"frozen": True, "extra": "forbid"}


def _coerce_bool(v: str) -> bool:
    """Convert string to boolean using common conventions."""
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _coerce_env_value(value: str, target_type: type | None) -> Any:
    """Coerce env string to target type when possible.

    Falls back to the original string so the schema reports the bad value.
    """
    if target_type is bool:
        return _coerce_bool(value)
    if target_type is int:
        try:
            return int(value)
        except ValueError:
            return value
    return value


def load_env() -> Mapping[str, Any]:
    """Read ``FALLIBLE_*`` variables that name a ``Settings`` field.

    Unknown suffixes are ignored so unrelated variables sharing the prefix do
    not break resolution.
    """
    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        info = Settings.model_fields.get(field_name)
        if info is None:
            continue
        config[field_name] = _coerce_env_value(value, info.annotation)
    return config


def resolve_settings(
    overrides: Mapping[str, Any] | None = None, *, use_env: bool = True
) -> Settings:
    """Merge defaults, environment and overrides into validated ``Settings``.

    Raises:
        ConfigurationError: A value failed schema validation.
    """
    merged: dict[str, Any] = {}
    if use_env:
        merged.update(load_env())
    if overrides:
        merged.update(overrides)
    try:
        settings = Settings(**merged)
    except ValidationError as exc:
        fields = sorted({str(e["loc"][0]) for e in exc.errors() if e.get("loc")})
        raise ConfigurationError(
            f"Invalid fallible settings: {', '.join(fields) or 'unknown field'}",
            hint=(
                "Check FALLIBLE_CAPTURE_TRACE (bool) and FALLIBLE_TRACE_LIMIT "
                "(int >= 1), or the overrides passed in."
            ),
        ) from exc
    logger.debug("Resolved settings: %s", settings)
    return settings


@cache
def _env_settings() -> Settings:
    load_dotenv(override=False)
    return resolve_settings()


_scoped: contextvars.ContextVar[Settings | None] = contextvars.ContextVar(
    "fallible_settings", default=None
)


def get_settings() -> Settings:
    """Return the active settings.

    The innermost ``settings_scope`` wins; otherwise the environment is
    resolved once and cached until ``reload_settings()``.
    """
    scoped = _scoped.get()
    if scoped is not None:
        return scoped
    return _env_settings()


@cache
def _lenient_env_settings() -> Settings:
    try:
        return _env_settings()
    except ConfigurationError as exc:
        logger.warning("Invalid fallible settings ignored, using defaults: %s", exc)
        return Settings()


def diagnostic_settings() -> Settings:
    """Return the active settings for ``Err`` diagnostics; never raises.

    Like ``get_settings()``, but an invalid environment is logged once and
    replaced by the defaults, so building an ``Err`` cannot fail.
    """
    scoped = _scoped.get()
    if scoped is not None:
        return scoped
    return _lenient_env_settings()


def reload_settings() -> None:
    """Drop the cached environment resolution."""
    _env_settings.cache_clear()
    _lenient_env_settings.cache_clear()


@contextmanager
def settings_scope(**overrides: Any) -> Generator[Settings, None, None]:
    """Activate settings derived from the current ones for the ``with`` body.

    Example:
        with settings_scope(capture_trace=False):
            result = err("quiet")
    """
    base = get_settings().model_dump()
    settings = resolve_settings({**base, **overrides}, use_env=False)
    token = _scoped.set(settings)
    try:
        yield settings
    finally:
        _scoped.reset(token)
