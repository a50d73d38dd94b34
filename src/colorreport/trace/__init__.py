"""
colorreport.trace
=================

Trace capture collaborators: stack frames, execution-scope spans, and the
filters that decide which frames are noise.
"""

from __future__ import annotations

from colorreport.trace.directives import FilterRule, directive_filter, parse_directives
from colorreport.trace.filters import (
    FrameFilter,
    HiddenFrames,
    collapse_hidden,
    default_filters,
    hide_files,
    hide_modules,
)
from colorreport.trace.frames import Backtrace, Frame
from colorreport.trace.spans import SpanRecord, SpanTrace, current_spans, instrument, span

__all__ = [
    "Frame",
    "Backtrace",
    "SpanRecord",
    "SpanTrace",
    "span",
    "instrument",
    "current_spans",
    "FrameFilter",
    "HiddenFrames",
    "hide_modules",
    "hide_files",
    "default_filters",
    "collapse_hidden",
    "FilterRule",
    "parse_directives",
    "directive_filter",
]
