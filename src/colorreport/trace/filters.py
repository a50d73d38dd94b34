"""
Frame filters: predicates deciding which backtrace frames are worth showing.
A filter returns True to keep a frame; a frame is shown only if every filter
keeps it.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from colorreport.trace.frames import Frame

__all__ = [
    "FrameFilter",
    "HiddenFrames",
    "hide_modules",
    "hide_files",
    "default_filters",
    "collapse_hidden",
]

FrameFilter: TypeAlias = Callable[[Frame], bool]

# interpreter / bootstrap noise plus our own capture machinery
DEFAULT_HIDDEN_MODULES: tuple[str, ...] = (
    "colorreport",
    "colorreport.*",
    "importlib._bootstrap*",
    "runpy",
    "threading",
)


@dataclass(frozen=True, slots=True)
class HiddenFrames:
    count: int


def hide_modules(*patterns: str) -> FrameFilter:
    """Hide frames whose module name matches any glob pattern."""

    def _keep(frame: Frame) -> bool:
        mod = frame.module or ""
        return not any(fnmatch.fnmatchcase(mod, p) for p in patterns)

    return _keep


def hide_files(*patterns: str) -> FrameFilter:
    """Hide frames whose filename matches any glob pattern."""

    def _keep(frame: Frame) -> bool:
        fn = frame.filename or ""
        return not any(fnmatch.fnmatchcase(fn, p) for p in patterns)

    return _keep


def default_filters() -> tuple[FrameFilter, ...]:
    return (hide_modules(*DEFAULT_HIDDEN_MODULES), hide_files("<frozen *>"))


def collapse_hidden(
    frames: Iterable[Frame], filters: Sequence[FrameFilter]
) -> list[Frame | HiddenFrames]:
    """
    Replace each run of consecutive filtered-out frames with one HiddenFrames
    marker. Kept frames retain their original index.
    """
    out: list[Frame | HiddenFrames] = []
    hidden = 0
    for fr in frames:
        if all(f(fr) for f in filters):
            if hidden:
                out.append(HiddenFrames(hidden))
                hidden = 0
            out.append(fr)
        else:
            hidden += 1
    if hidden:
        out.append(HiddenFrames(hidden))
    return out
