"""
Script-friendly helpers for printing reports:
- `use_reports(...)`: context manager that makes a Console active for the
  block, with Rich color behavior picked from 'auto' defaults.
- `print_report(...)`: print a Report through the active Console.
- `run_with_reports(...)`: decorator to wrap a function in the same context
  and pretty-print a Report on the way out.
"""

from __future__ import annotations

import contextvars
import functools
import os
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from rich.console import Console

from colorreport.constants import COLOR_ENV

if TYPE_CHECKING:
    from colorreport.config import Verbosity
    from colorreport.report import Report

__all__ = ["make_console", "stderr_console", "use_reports", "print_report", "run_with_reports"]


# Track the active Console so print_report() can reuse the same settings.
_active_console: contextvars.ContextVar[Console | None] = contextvars.ContextVar(
    "_active_console", default=None
)


def make_console(color: str | None = None) -> Console:
    """
    Console on stderr. color: 'auto' | 'always' | 'never' | None (env
    COLORREPORT_COLOR or 'auto').
    """
    color = (color or os.getenv(COLOR_ENV) or "auto").lower()
    return Console(
        stderr=True,
        force_terminal=(color == "always"),
        no_color=(color == "never"),
        highlight=False,
    )


def stderr_console() -> Console:
    return _active_console.get() or make_console()


@contextmanager
def use_reports(*, color: str | None = None, console: Console | None = None) -> Iterator[Console]:
    """Make a Console active for the block; yields it."""
    console = console or make_console(color)
    token = _active_console.set(console)
    try:
        yield console
    finally:
        _active_console.reset(token)


def print_report(
    report: Report,
    console: Console | None = None,
    verbosity: Verbosity | None = None,
) -> None:
    """
    Pretty-print a Report; uses the active Console if available. Errors from
    the underlying stream propagate.
    """
    from colorreport.hooks import installed_config
    from colorreport.render import render_text

    text = render_text(report, verbosity, config=installed_config())
    (console or stderr_console()).print(text, soft_wrap=True, end="")


def run_with_reports(  # type: ignore
    *,
    color: str | None = None,
    exit_on_report: bool = True,
):
    """
    Decorator: runs the function inside `use_reports(...)`.
    If a Report escapes, pretty-print it and (by default) exit 1.
    """
    from colorreport.report import Report

    def deco(fn):  # type: ignore
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):  # type: ignore
            with use_reports(color=color):
                try:
                    return fn(*args, **kwargs)
                except Report as e:
                    print_report(e)
                    if exit_on_report:
                        raise SystemExit(1)
                    raise
        return wrapper
    return deco
