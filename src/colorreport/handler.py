from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeAlias

from colorreport.config import HookConfig
from colorreport.section import HelpInfo
from colorreport.trace.frames import Backtrace
from colorreport.trace.spans import SpanTrace

logger = logging.getLogger(__name__)

__all__ = ["Handler", "HandlerFactory", "default_handler"]


@dataclass(slots=True)
class Handler:
    """
    Diagnostic context owned by exactly one Report: traces captured when the
    report was built and the sections attached since, in attachment order.
    """

    backtrace: Backtrace | None = None
    span_trace: SpanTrace | None = None
    sections: list[HelpInfo] = field(default_factory=list)

    @classmethod
    def capture(cls, error: BaseException | None, config: HookConfig) -> Handler:
        """
        Capture whatever `config` enables. A capture that fails degrades to None;
        building a report never fails because a trace was unavailable.
        """
        backtrace: Backtrace | None = None
        if config.should_capture_backtrace():
            try:
                backtrace = Backtrace.capture(skip=1, error=error)
            except Exception as e:
                logger.debug("backtrace capture failed: %r", e)

        span_trace: SpanTrace | None = None
        if config.should_capture_span_trace():
            try:
                span_trace = SpanTrace.capture()
            except Exception as e:
                logger.debug("span trace capture failed: %r", e)

        return cls(backtrace=backtrace, span_trace=span_trace)


HandlerFactory: TypeAlias = Callable[[BaseException | None], Handler]


def default_handler(error: BaseException | None) -> Handler:
    """Factory used before any hook is installed: no capture at all."""
    _ = error
    return Handler()
