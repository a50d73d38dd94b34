"""
colorreport.trace.frames
========================

Frame snapshots and backtrace capture.

Frames are captured eagerly as plain data (name, module, file, line) so a
report never keeps interpreter frame objects alive after construction.
Index 0 is always the innermost frame.
"""

from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass, replace
from types import FrameType, TracebackType

__all__ = ["Frame", "Backtrace", "frame_name"]


@dataclass(frozen=True, slots=True)
class Frame:
    index: int
    name: str
    module: str | None = None
    filename: str | None = None
    lineno: int | None = None
    # key=value context; only span frames carry any
    fields: tuple[tuple[str, str], ...] = ()

    @property
    def location(self) -> str | None:
        if self.filename is None:
            return None
        if self.lineno is None:
            return self.filename
        return f"{self.filename}:{self.lineno}"


def frame_name(f: FrameType) -> str:
    """`module.qualname` for a live frame, as shown in backtraces."""
    code = f.f_code
    qual = getattr(code, "co_qualname", code.co_name)
    mod = f.f_globals.get("__name__")
    return f"{mod}.{qual}" if mod else qual


def _snapshot(f: FrameType, lineno: int | None) -> Frame:
    return Frame(
        index=0,
        name=frame_name(f),
        module=f.f_globals.get("__name__"),
        filename=f.f_code.co_filename,
        lineno=lineno,
    )


def _reindex(frames: list[Frame]) -> tuple[Frame, ...]:
    return tuple(replace(fr, index=i) for i, fr in enumerate(frames))


@dataclass(frozen=True, slots=True)
class Backtrace:
    frames: tuple[Frame, ...]

    def __len__(self) -> int:
        return len(self.frames)

    @classmethod
    def from_traceback(cls, tb: TracebackType | None) -> Backtrace:
        """
        Stack at the point an exception was raised: the traceback entries
        (innermost first) followed by the callers of the outermost entry.
        """
        if tb is None:
            return cls(())
        raised = [(f, ln) for f, ln in traceback.walk_tb(tb)]
        frames = [_snapshot(f, ln) for f, ln in reversed(raised)]
        outer = raised[0][0].f_back
        # a finished frame has no f_back; walk_stack(None) would walk our own stack
        if outer is not None:
            frames.extend(_snapshot(f, ln) for f, ln in traceback.walk_stack(outer))
        return cls(_reindex(frames))

    @classmethod
    def capture(cls, *, skip: int = 0, error: BaseException | None = None) -> Backtrace:
        """
        Capture the current call stack, skipping `skip` frames above the caller.

        When `error` carries a traceback its raise-time stack is used instead,
        since that is where the failure actually happened.
        """
        if error is not None and error.__traceback__ is not None:
            return cls.from_traceback(error.__traceback__)
        start = sys._getframe(skip + 1)
        frames = [_snapshot(f, ln) for f, ln in traceback.walk_stack(start)]
        return cls(_reindex(frames))
