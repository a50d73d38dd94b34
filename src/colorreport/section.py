"""
colorreport.section
===================

Sections: auxiliary blocks attached to a report and rendered after its error
chain, each on its own.

- HelpInfo variants (ErrorHelp, CustomHelp, SuggestionHelp, WarningHelp, NoteHelp)
- header(): build a CustomHelp from a body and a title
- Section: fluent attachment mixin shared by Report, Ok and Err
- attach(): functional form of Section.section()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Self, TypeAlias

__all__ = [
    "ErrorHelp",
    "CustomHelp",
    "SuggestionHelp",
    "WarningHelp",
    "NoteHelp",
    "HelpInfo",
    "header",
    "Section",
    "attach",
]


@dataclass(frozen=True, slots=True)
class ErrorHelp:
    """A peer cause: an error outside the report's own chain."""

    cause: BaseException


@dataclass(frozen=True, slots=True)
class CustomHelp:
    """
    A titled block. `body` is either a value or a zero-arg callable; callables
    run only when the report is displayed, once per display.
    """

    header: str
    body: object | Callable[[], object]

    def render_body(self) -> str:
        body = self.body
        if callable(body):
            body = body()
        return str(body)


@dataclass(frozen=True, slots=True)
class SuggestionHelp:
    text: str


@dataclass(frozen=True, slots=True)
class WarningHelp:
    text: str


@dataclass(frozen=True, slots=True)
class NoteHelp:
    text: str


HelpInfo: TypeAlias = ErrorHelp | CustomHelp | SuggestionHelp | WarningHelp | NoteHelp


def header(body: object | Callable[[], object], title: str) -> CustomHelp:
    """
    Title a body for use as a custom section.

        report.section(header(stderr, "Stderr:"))
    """
    return CustomHelp(header=title, body=body)


class Section(ABC):
    """
    Fluent section attachment. Every method returns the outcome so calls chain:

        Err(e).wrap_err("Unable to read config").suggestion("try a file that exists")

    On a success outcome every method is a no-op and `with_*` thunks never run.
    """

    @abstractmethod
    def _attach(self, make: Callable[[], HelpInfo]) -> Self: ...

    def section(self, help: HelpInfo) -> Self:
        return self._attach(lambda: help)

    def with_section(self, fn: Callable[[], HelpInfo]) -> Self:
        return self._attach(fn)

    def error(self, cause: BaseException) -> Self:
        return self._attach(lambda: ErrorHelp(cause))

    def with_error(self, fn: Callable[[], BaseException]) -> Self:
        return self._attach(lambda: ErrorHelp(fn()))

    def suggestion(self, text: object) -> Self:
        return self._attach(lambda: SuggestionHelp(str(text)))

    def with_suggestion(self, fn: Callable[[], object]) -> Self:
        return self._attach(lambda: SuggestionHelp(str(fn())))

    def warning(self, text: object) -> Self:
        return self._attach(lambda: WarningHelp(str(text)))

    def with_warning(self, fn: Callable[[], object]) -> Self:
        return self._attach(lambda: WarningHelp(str(fn())))

    def note(self, text: object) -> Self:
        return self._attach(lambda: NoteHelp(str(text)))

    def with_note(self, fn: Callable[[], object]) -> Self:
        return self._attach(lambda: NoteHelp(str(fn())))


def attach(outcome: Any, help: HelpInfo) -> Any:
    """
    Attach `help` to an outcome: a Report, an Ok/Err, or a bare exception
    (converted to a Report first). Returns the outcome to keep chaining.
    """
    if isinstance(outcome, Section):
        return outcome.section(help)
    if isinstance(outcome, BaseException):
        from colorreport.report import Report

        return Report.from_error(outcome).section(help)
    raise TypeError(
        f"attach() expected a Report, Ok, Err or exception; got {type(outcome).__name__}"
    )
