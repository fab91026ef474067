"""Creation-site trace capture for ``Err`` diagnostics."""

from __future__ import annotations

import sys
import traceback
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import FrameType

__all__ = ["capture_trace"]

_PACKAGE = __name__.partition(".")[0]


def _is_internal(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "")
    return module == _PACKAGE or module.startswith(f"{_PACKAGE}.")


def capture_trace(limit: int) -> str | None:
    """Render the caller's stack, skipping frames inside this package.

    Frames are listed oldest call first, like a traceback, and only the
    ``limit`` innermost ones are kept. Returns ``None`` when no frame outside
    the package exists.
    """
    frame: FrameType | None = sys._getframe(1)
    while frame is not None and _is_internal(frame):
        frame = frame.f_back
    if frame is None:
        return None

    summary = traceback.StackSummary.extract(
        traceback.walk_stack(frame), limit=limit, lookup_lines=False
    )
    summary.reverse()
    return "".join(summary.format()).rstrip("\n")
