"""
colorreport.report
==================

The base report type and causal-chain traversal.

A Report is an Exception that wraps either a message or another exception and
owns exactly one Handler, built by the installed hook at construction time.
Its chain follows Python's own links: `__cause__` first, then `__context__`
unless suppressed. Index 0 is the report itself, the last entry is the root
cause.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, TypeVar

from rich.console import Console, ConsoleOptions, RenderResult

from colorreport.constants import MAX_CHAIN_DEPTH
from colorreport.errors import ChainWalkError
from colorreport.handler import Handler
from colorreport.section import HelpInfo, Section

if TYPE_CHECKING:
    from colorreport.config import Verbosity

__all__ = ["Report", "iter_chain", "next_cause", "describe"]

E = TypeVar("E", bound=BaseException)


def next_cause(err: BaseException) -> BaseException | None:
    if err.__cause__ is not None:
        return err.__cause__
    if err.__context__ is not None and not err.__suppress_context__:
        return err.__context__
    return None


def _unwrap(err: BaseException) -> BaseException:
    if isinstance(err, Report) and err.wrapped is not None:
        return err.wrapped
    return err


def iter_chain(err: BaseException, *, limit: int = MAX_CHAIN_DEPTH) -> Iterator[BaseException]:
    """
    Yield `err` and its causes, top-level first. Raises ChainWalkError instead
    of looping when the chain is longer than `limit` (e.g. a cycle).
    """
    cur: BaseException | None = _unwrap(err)
    depth = 0
    while cur is not None:
        if depth >= limit:
            raise ChainWalkError(limit)
        yield cur
        depth += 1
        nxt = next_cause(cur)
        cur = _unwrap(nxt) if nxt is not None else None


def describe(err: BaseException) -> str:
    """Display text for one chain entry."""
    try:
        text = str(err)
    except Exception:
        return f"<unprintable {type(err).__name__} object>"
    return text if text else type(err).__name__


def _handler_for(error: BaseException | None) -> Handler:
    from colorreport.hooks import build_handler

    return build_handler(error)


class Report(Section, Exception):
    """
    An error plus its diagnostics.

        raise Report("Unable to read config").suggestion("try a file that exists")

    Wrapping an existing exception keeps that exception (and its chain) as the
    report's chain:

        except OSError as e:
            raise Report(e).wrap_err("Unable to read config")
    """

    def __init__(self, error: BaseException | object, *, handler: Handler | None = None) -> None:
        if isinstance(error, Report):
            # the inner report's handler, sections included, carries over
            if handler is None:
                handler = error.handler
            error = error.wrapped if error.wrapped is not None else error
        if isinstance(error, BaseException):
            self.wrapped: BaseException | None = error
            message = describe(error)
        else:
            self.wrapped = None
            message = str(error)
        super().__init__(message)
        self.message = message
        self.handler = handler if handler is not None else _handler_for(self.wrapped)

    @classmethod
    def from_error(cls, error: BaseException) -> Report:
        """Convert any exception into a Report; Reports pass through unchanged."""
        if isinstance(error, Report):
            return error
        return cls(error)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"

    # ── chain ──

    def chain(self) -> Iterator[BaseException]:
        return iter_chain(self)

    def root_cause(self) -> BaseException:
        last: BaseException = self
        for last in self.chain():
            pass
        return last

    def downcast(self, tp: type[E]) -> E | None:
        """First entry of the chain that is an instance of `tp`, if any."""
        for err in self.chain():
            if isinstance(err, tp):
                return err
        return None

    def is_a(self, tp: type[BaseException]) -> bool:
        return self.downcast(tp) is not None

    def wrap_err(self, message: object) -> Report:
        """
        New report with `message` as its top-level context and this report's
        chain below it. The Handler, sections included, moves to the new report.
        """
        outer = Report(message, handler=self.handler)
        outer.__cause__ = self
        return outer

    def wrap_err_with(self, fn: Callable[[], object]) -> Report:
        return self.wrap_err(fn())

    # ── sections ──

    @property
    def sections(self) -> list[HelpInfo]:
        return self.handler.sections

    def _attach(self, make: Callable[[], HelpInfo]) -> Report:
        self.handler.sections.append(make())
        return self

    # ── display ──

    def format(self, verbosity: Verbosity | None = None, **kwargs: Any) -> str:
        """Plain-text report, see colorreport.render.render."""
        from colorreport.hooks import installed_config
        from colorreport.render import render

        kwargs.setdefault("config", installed_config())
        return render(self, verbosity, **kwargs)

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        _ = console
        _ = options
        from colorreport.hooks import installed_config
        from colorreport.render import render_text

        yield render_text(self, config=installed_config())
