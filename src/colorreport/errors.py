"""
colorreport exceptions: a base ColorReportError that renders through Rich the
same way reports do, plus the structural faults the package can raise.
"""

from __future__ import annotations

from rich.console import Console, ConsoleOptions, RenderResult
from rich.text import Text

__all__ = [
    "ColorReportError",
    "AlreadyInstalledError",
    "ChainWalkError",
    "DirectiveError",
]


class ColorReportError(Exception):
    """
    Base colorreport exception. Prints as a single styled line with Rich.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        return self.message

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        _ = console
        _ = options
        yield Text.assemble(("error", "bold red"), f": {self.message}")


class AlreadyInstalledError(ColorReportError):
    """Raised by every install attempt after the first successful one."""

    def __init__(self) -> None:
        super().__init__("a report hook has already been installed for this process")


class ChainWalkError(ColorReportError):
    """The causal chain is longer than the walk allows (usually a cycle)."""

    def __init__(self, depth: int) -> None:
        super().__init__(
            f"error chain exceeded {depth} causes; refusing to render a cyclic chain"
        )
        self.depth = depth


class DirectiveError(ColorReportError):
    """A frame-filter directive string could not be parsed."""

    def __init__(self, directives: str, reason: str) -> None:
        super().__init__(f"invalid frame filter directive {directives!r}: {reason}")
        self.directives = directives
        self.reason = reason
