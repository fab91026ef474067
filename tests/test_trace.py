"""Creation-site traces recorded on Err."""

from __future__ import annotations

import logging

import pytest

from fallible import UnwrapError, err, reload_settings, settings_scope, wrap, wrap_async
from fallible import helpers, result

pytestmark = pytest.mark.unit


def _frame_lines(trace: str) -> list[str]:
    return [line.strip() for line in trace.splitlines() if line.lstrip().startswith("File ")]


def test_err_records_creation_site() -> None:
    e = err("boom")
    assert e.trace is not None
    frames = _frame_lines(e.trace)
    assert frames[-1].endswith("in test_err_records_creation_site")
    assert 'err("boom")' in e.trace


def test_library_frames_are_skipped() -> None:
    e = err("boom")
    assert result.__file__ not in e.trace


def test_wrap_points_at_caller() -> None:
    def fail():
        raise ValueError("nope")

    e = wrap(fail)
    frames = _frame_lines(e.trace)
    assert frames[-1].endswith("in test_wrap_points_at_caller")
    assert helpers.__file__ not in e.trace


def test_unwrap_message_includes_trace() -> None:
    e = err("boom")
    with pytest.raises(UnwrapError) as exc_info:
        e.unwrap()
    assert str(exc_info.value) == f"Tried to unwrap an Err: boom\n{e.trace}"
    assert exc_info.value.trace == e.trace


def test_expect_message_includes_trace() -> None:
    e = err("boom")
    with pytest.raises(UnwrapError) as exc_info:
        e.expect("loading config")
    assert str(exc_info.value) == f"loading config - Error: boom\n{e.trace}"


def test_trace_limit_bounds_frames() -> None:
    with settings_scope(trace_limit=1):
        e = err("boom")
    frames = _frame_lines(e.trace)
    assert len(frames) == 1
    assert frames[0].endswith("in test_trace_limit_bounds_frames")


def test_capture_disabled_by_scope() -> None:
    with settings_scope(capture_trace=False):
        e = err("boom")
    assert e.trace is None
    with pytest.raises(UnwrapError) as exc_info:
        e.unwrap()
    assert str(exc_info.value) == "Tried to unwrap an Err: boom"
    assert err("boom").trace is not None


def test_capture_disabled_by_env(monkeypatch) -> None:
    monkeypatch.setenv("FALLIBLE_CAPTURE_TRACE", "false")
    reload_settings()
    assert err("boom").trace is None


def test_invalid_env_does_not_break_err_construction(monkeypatch, caplog) -> None:
    monkeypatch.setenv("FALLIBLE_TRACE_LIMIT", "0")
    reload_settings()
    caplog.set_level(logging.WARNING, logger="fallible")

    assert wrap(int, "x").is_err()
    assert err("x").is_err()
    assert err("x").map_err(str.upper) == err("X")
    assert err("x").trace is not None

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "trace_limit" in warnings[0].getMessage()


@pytest.mark.asyncio
async def test_invalid_env_does_not_break_wrap_async(monkeypatch) -> None:
    monkeypatch.setenv("FALLIBLE_CAPTURE_TRACE", "true")
    monkeypatch.setenv("FALLIBLE_TRACE_LIMIT", "many")
    reload_settings()

    async def fail():
        raise OSError("disk")

    result = await wrap_async(fail)
    assert isinstance(result.error, OSError)


def test_explicit_trace_is_kept() -> None:
    e = result.Err("boom", trace="custom")
    assert e.trace == "custom"
