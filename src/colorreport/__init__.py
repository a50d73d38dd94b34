"""
colorreport
===========

Colorful, consistent error reports: causal chains, attachable sections, span
and stack traces, and an install-once hook so every unhandled failure is
rendered the same way.

    import colorreport
    from colorreport import Report

    colorreport.install()

    def read_config():
        try:
            open("fake_file")
        except OSError as e:
            raise Report(e).wrap_err("Unable to read config").suggestion(
                "try using a file that exists next time"
            )
"""

from __future__ import annotations

from colorreport.aggregate import from_exception_group, join_errors
from colorreport.config import HookBuilder, HookConfig, Theme, Verbosity, load_theme
from colorreport.console import print_report, run_with_reports, use_reports
from colorreport.errors import (
    AlreadyInstalledError,
    ChainWalkError,
    ColorReportError,
    DirectiveError,
)
from colorreport.handler import Handler
from colorreport.hooks import HookState, PanicInfo, install, is_installed
from colorreport.render import render, render_panic, render_text
from colorreport.report import Report
from colorreport.result import Err, Ok, Result, catch
from colorreport.section import (
    CustomHelp,
    ErrorHelp,
    HelpInfo,
    NoteHelp,
    Section,
    SuggestionHelp,
    WarningHelp,
    attach,
    header,
)
from colorreport.trace import Backtrace, Frame, SpanTrace, instrument, span

__all__ = [
    "install",
    "is_installed",
    "HookState",
    "HookBuilder",
    "HookConfig",
    "Theme",
    "load_theme",
    "Verbosity",
    "PanicInfo",
    "Report",
    "Handler",
    "Ok",
    "Err",
    "Result",
    "catch",
    "Section",
    "HelpInfo",
    "ErrorHelp",
    "CustomHelp",
    "SuggestionHelp",
    "WarningHelp",
    "NoteHelp",
    "attach",
    "header",
    "join_errors",
    "from_exception_group",
    "render",
    "render_text",
    "render_panic",
    "print_report",
    "use_reports",
    "run_with_reports",
    "Frame",
    "Backtrace",
    "SpanTrace",
    "span",
    "instrument",
    "ColorReportError",
    "AlreadyInstalledError",
    "ChainWalkError",
    "DirectiveError",
]
