"""
colorreport.render
==================

Turn a Report (its chain plus its Handler's captured context) into text.

The renderer builds a rich `Text`; the plain string form is `Text.plain`, so
colored and uncolored output share one line layout:

    Error:
       0: Unable to read config
       1: No such file or directory (os error 2)

    Stderr:
       cat: fake_file: No such file or directory

      ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━ SPANTRACE ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

       0: app.read_file with path='fake_file'
          at app.py:32

Trace blocks appear only at SHORT verbosity and above, and only when the
corresponding trace was captured. FULL adds source windows under frames.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.text import Text

from colorreport.config import HookConfig, Theme, Verbosity, lib_verbosity
from colorreport.config import show_hidden as env_show_hidden
from colorreport.constants import (
    BACKTRACE_ENV,
    CONTINUATION_INDENT,
    ERROR_HEADER,
    PANIC_HEADER,
    REPORT_WIDTH,
    SECTION_INDENT,
    SHOW_HIDDEN_ENV,
    SOURCE_CONTEXT_LINES,
)
from colorreport.report import Report, describe, iter_chain
from colorreport.section import (
    CustomHelp,
    ErrorHelp,
    HelpInfo,
    NoteHelp,
    SuggestionHelp,
    WarningHelp,
)
from colorreport.source import Source, load_source
from colorreport.trace.filters import FrameFilter, HiddenFrames, collapse_hidden
from colorreport.trace.frames import Frame

if TYPE_CHECKING:
    from colorreport.hooks import PanicInfo

logger = logging.getLogger(__name__)

__all__ = ["render", "render_text", "render_panic", "render_panic_text", "trace_title"]


def trace_title(title: str) -> str:
    return "  " + f" {title} ".center(REPORT_WIDTH - 2, "━")


def _hidden_banner(count: int) -> str:
    plural = "" if count == 1 else "s"
    return ("  " + f"⋮ {count} frame{plural} hidden ⋮".center(REPORT_WIDTH - 2)).rstrip()


class _Writer:
    """Line-oriented Text builder; blocks are separated by one blank line."""

    def __init__(self, theme: Theme) -> None:
        self.theme = theme
        self.text = Text()
        self.frames_hidden = False

    def line(self, *parts: str | tuple[str, str]) -> None:
        self.text.append_text(Text.assemble(*parts))
        self.text.append("\n")

    def blank(self) -> None:
        self.text.append("\n")

    def block(self) -> None:
        if self.text.plain:
            self.blank()

    def numbered(self, n: int, message: str, style: str) -> None:
        lines = message.splitlines() or [""]
        self.line(f"{n:>4}: ", (lines[0], style))
        for extra in lines[1:]:
            self.line(CONTINUATION_INDENT, (extra, style))


# ────────────────────────── chain & sections ──────────────────────────


def _write_chain(w: _Writer, err: BaseException, title: str = ERROR_HEADER) -> None:
    w.line((title, w.theme.header))
    for n, cause in enumerate(iter_chain(err)):
        w.numbered(n, describe(cause), w.theme.error)


def _write_labelled(w: _Writer, label: str, style: str, text: str) -> None:
    if not text.strip():
        return
    lines = text.splitlines()
    w.block()
    w.line((label, style), f": {lines[0]}")
    for extra in lines[1:]:
        w.line(SECTION_INDENT, extra)


def _write_custom(w: _Writer, help: CustomHelp) -> None:
    try:
        body = help.render_body()
    except Exception as e:
        logger.debug("section %r failed to render: %r", help.header, e)
        w.block()
        w.line((help.header, w.theme.section_header))
        w.line(
            SECTION_INDENT,
            (f"[failed to render section: {type(e).__name__}: {describe(e)}]", w.theme.failed_section),
        )
        return

    if not body.strip():
        return
    w.block()
    w.line((help.header, w.theme.section_header))
    for ln in body.splitlines():
        w.line(SECTION_INDENT, ln)


def _write_section(w: _Writer, help: HelpInfo) -> None:
    t = w.theme
    if isinstance(help, ErrorHelp):
        w.block()
        _write_chain(w, help.cause)
    elif isinstance(help, CustomHelp):
        _write_custom(w, help)
    elif isinstance(help, SuggestionHelp):
        _write_labelled(w, "Suggestion", t.help_label, help.text)
    elif isinstance(help, WarningHelp):
        _write_labelled(w, "Warning", t.warning_label, help.text)
    elif isinstance(help, NoteHelp):
        _write_labelled(w, "Note", t.note_label, help.text)
    else:  # pragma: no cover - closed variant set
        raise TypeError(f"unknown section type {type(help).__name__}")


# ────────────────────────── traces ──────────────────────────


def _write_source_window(w: _Writer, frame: Frame, cache: dict[str, Source | None]) -> None:
    if frame.lineno is None:
        return
    src = load_source(frame.filename, cache)
    if src is None:
        return
    for n, code in src.window(frame.lineno, SOURCE_CONTEXT_LINES):
        if n == frame.lineno:
            w.line((f"{n:>10} > {code}", w.theme.active_line))
        else:
            w.line((f"{n:>10} │ {code}".rstrip(), w.theme.source_line))


def _write_frame(
    w: _Writer,
    frame: Frame,
    verbosity: Verbosity,
    cache: dict[str, Source | None],
    name_style: str,
) -> None:
    t = w.theme
    parts: list[str | tuple[str, str]] = [f"{frame.index:>4}: ", (frame.name, name_style)]
    if frame.fields:
        parts.append(" with ")
        parts.append((" ".join(f"{k}={v}" for k, v in frame.fields), t.span_fields))
    w.line(*parts)
    if frame.filename is not None:
        loc: list[str | tuple[str, str]] = [CONTINUATION_INDENT, "at ", (frame.filename, t.file)]
        if frame.lineno is not None:
            loc += [":", (str(frame.lineno), t.line_number)]
        w.line(*loc)
    if verbosity >= Verbosity.FULL:
        _write_source_window(w, frame, cache)


def _write_span_trace(
    w: _Writer, frames: Sequence[Frame], verbosity: Verbosity, cache: dict[str, Source | None]
) -> None:
    if not frames:
        return
    w.block()
    w.line((trace_title("SPANTRACE"), w.theme.trace_title))
    w.blank()
    for fr in frames:
        _write_frame(w, fr, verbosity, cache, w.theme.span_name)


def _write_backtrace(
    w: _Writer,
    frames: Sequence[Frame],
    verbosity: Verbosity,
    filters: Sequence[FrameFilter],
    cache: dict[str, Source | None],
) -> None:
    if not frames:
        return
    w.block()
    w.line((trace_title("BACKTRACE"), w.theme.trace_title))
    for item in collapse_hidden(frames, filters):
        if isinstance(item, HiddenFrames):
            w.frames_hidden = True
            w.line((_hidden_banner(item.count), w.theme.hidden_frames))
        else:
            _write_frame(w, item, verbosity, cache, w.theme.frame_name)


def _write_env_section(w: _Writer, verbosity: Verbosity) -> None:
    hints: list[str] = []
    if verbosity <= Verbosity.MINIMAL:
        hints.append(
            f"Backtrace omitted. Run with {BACKTRACE_ENV}=1 environment variable to display it."
        )
    if verbosity <= Verbosity.SHORT:
        hints.append(f"Run with {BACKTRACE_ENV}=full to include source snippets.")
    if w.frames_hidden:
        hints.append(
            f"Run with {SHOW_HIDDEN_ENV}=1 environment variable to disable frame filtering."
        )
    if not hints:
        return
    w.block()
    for h in hints:
        w.line(h)


def _write_traces(
    w: _Writer,
    report: Report,
    verbosity: Verbosity,
    filters: Sequence[FrameFilter],
) -> None:
    handler = report.handler
    if verbosity < Verbosity.SHORT:
        return
    cache: dict[str, Source | None] = {}
    if handler.span_trace is not None:
        _write_span_trace(w, handler.span_trace.frames, verbosity, cache)
    if handler.backtrace is not None:
        _write_backtrace(w, handler.backtrace.frames, verbosity, filters, cache)


def _effective_filters(config: HookConfig, show_hidden: bool | None) -> Sequence[FrameFilter]:
    if show_hidden is None:
        show_hidden = env_show_hidden()
    return () if show_hidden else config.filters


# ────────────────────────── public API ──────────────────────────


def render_text(
    report: Report,
    verbosity: Verbosity | None = None,
    *,
    config: HookConfig | None = None,
    theme: Theme | None = None,
    show_hidden: bool | None = None,
    env_section: bool = False,
) -> Text:
    """
    Styled report. `verbosity` defaults to the environment (see
    colorreport.config.lib_verbosity); `theme` defaults to the config's.
    Raises ChainWalkError if a chain is too long to be real.
    """
    config = config or HookConfig()
    if verbosity is None:
        verbosity = lib_verbosity()
    w = _Writer(theme or config.theme)

    _write_chain(w, report)
    for help in report.handler.sections:
        _write_section(w, help)
    _write_traces(w, report, verbosity, _effective_filters(config, show_hidden))
    if env_section:
        _write_env_section(w, verbosity)
    return w.text


def render(report: Report, verbosity: Verbosity | None = None, **kwargs: object) -> str:
    """Plain-text report; the de facto format for logs and snapshot tests."""
    return render_text(report, verbosity, **kwargs).plain  # type: ignore[arg-type]


def render_panic_text(
    info: PanicInfo,
    *,
    config: HookConfig | None = None,
    verbosity: Verbosity = Verbosity.FULL,
    show_hidden: bool | None = None,
) -> Text:
    """
    Pseudo-report for an unhandled exception: panic header, message, location,
    any causes, then its traceback at `verbosity`.
    """
    config = config or HookConfig()
    w = _Writer(config.theme)
    t = w.theme

    if config.panic_message is not None:
        for ln in config.panic_message(info).splitlines():
            w.line(ln)
    else:
        w.line((PANIC_HEADER, t.panic_header))
        w.line("Message:  ", (info.message, t.error))
        if info.location is not None:
            w.line("Location: ", (info.location, t.file))
        if info.thread is not None:
            w.line("Thread:   ", info.thread)

    causes = list(iter_chain(info.exception))[1:]
    if causes:
        w.block()
        w.line(("Caused by:", t.header))
        for n, cause in enumerate(causes):
            w.numbered(n, describe(cause), t.error)

    cache: dict[str, Source | None] = {}
    if verbosity >= Verbosity.SHORT and info.backtrace is not None:
        _write_backtrace(
            w, info.backtrace.frames, verbosity, _effective_filters(config, show_hidden), cache
        )
    if config.display_env_section:
        _write_env_section(w, verbosity)
    return w.text


def render_panic(info: PanicInfo, **kwargs: object) -> str:
    return render_panic_text(info, **kwargs).plain  # type: ignore[arg-type]
