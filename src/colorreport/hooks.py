"""
Install-once report and panic hooks.

Do NOT install at import time. Applications opt in once, early:

    import colorreport

    colorreport.install()

After a successful install every Report captures traces per the installed
HookConfig, and unhandled exceptions (main thread and worker threads) are
rendered through the same renderer before the previously installed hooks run.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from colorreport.config import HookConfig, lib_verbosity
from colorreport.console import stderr_console
from colorreport.errors import AlreadyInstalledError
from colorreport.handler import Handler, HandlerFactory, default_handler
from colorreport.render import render_panic_text, render_text
from colorreport.report import Report, describe
from colorreport.trace.frames import Backtrace

logger = logging.getLogger(__name__)

__all__ = [
    "PanicInfo",
    "HookState",
    "install",
    "is_installed",
    "installed_config",
    "build_handler",
]

ExceptHook = Callable[[type[BaseException], BaseException, TracebackType | None], Any]
ThreadExceptHook = Callable[[threading.ExceptHookArgs], Any]


@dataclass(frozen=True, slots=True)
class PanicInfo:
    """What is known about an unhandled exception when it reaches the hook."""

    exception: BaseException
    message: str
    location: str | None
    backtrace: Backtrace | None
    thread: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException, *, thread: str | None = None) -> PanicInfo:
        bt = Backtrace.from_traceback(exc.__traceback__)
        location = bt.frames[0].location if bt.frames else None
        name = type(exc).__name__
        text = describe(exc)
        message = name if text == name else f"{name}: {text}"
        return cls(exception=exc, message=message, location=location, backtrace=bt, thread=thread)


class HookState:
    """
    Process-scoped hook state: uninstalled until the first successful
    install(), installed for the rest of the process. There is no uninstall.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._config: HookConfig | None = None
        self._factory: HandlerFactory = default_handler
        self._prev_excepthook: ExceptHook | None = None
        self._prev_thread_excepthook: ThreadExceptHook | None = None

    @property
    def installed(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> HookConfig | None:
        return self._config

    def install(self, config: HookConfig | None = None, *, register_hooks: bool = True) -> HookConfig:
        """
        Transition to installed. Exactly one caller wins; every later or
        concurrent caller gets AlreadyInstalledError and changes nothing.
        """
        config = config or HookConfig()
        with self._lock:
            if self._config is not None:
                raise AlreadyInstalledError()
            self._factory = lambda error: Handler.capture(error, config)
            if register_hooks:
                self._prev_excepthook = sys.excepthook
                self._prev_thread_excepthook = threading.excepthook
                sys.excepthook = self.excepthook
                threading.excepthook = self.thread_excepthook
            self._config = config
        logger.debug("report hooks installed (register_hooks=%s)", register_hooks)
        return config

    def build_handler(self, error: BaseException | None) -> Handler:
        return self._factory(error)

    # ── panic path ──

    def report_unhandled(self, exc: BaseException, *, thread: str | None = None) -> None:
        """
        Render an unhandled exception to stderr. Reports render as reports; any
        other exception becomes a panic pseudo-report at FULL verbosity. If
        rendering fails a single fallback line is written instead.
        """
        config = self._config or HookConfig()
        console = stderr_console()
        try:
            if isinstance(exc, Report):
                text = render_text(
                    exc,
                    lib_verbosity(),
                    config=config,
                    env_section=config.display_env_section,
                )
            else:
                text = render_panic_text(PanicInfo.from_exception(exc, thread=thread), config=config)
        except Exception as e:
            logger.debug("failed to render unhandled exception: %r", e)
            sys.stderr.write(f"Error: {describe(exc)}\n")
            return
        console.print(text, soft_wrap=True, end="")

    def excepthook(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        if exc.__traceback__ is None and tb is not None:
            exc = exc.with_traceback(tb)
        self.report_unhandled(exc)
        prev = self._prev_excepthook
        if prev is not None and prev is not sys.__excepthook__:
            prev(exc_type, exc, tb)

    def thread_excepthook(self, args: threading.ExceptHookArgs) -> None:
        # a worker calling sys.exit() is not a crash
        if args.exc_type is SystemExit:
            return
        if args.exc_value is not None:
            name = args.thread.name if args.thread is not None else None
            self.report_unhandled(args.exc_value, thread=name)
        prev = self._prev_thread_excepthook
        if prev is not None and prev is not threading.__excepthook__:
            prev(args)


_STATE = HookState()


def install(config: HookConfig | None = None) -> HookConfig:
    """
    Install the report and panic hooks for this process. Call early, before
    the first Report is built; reports built earlier keep an empty Handler.
    Raises AlreadyInstalledError on every call after the first success.
    """
    return _STATE.install(config)


def is_installed() -> bool:
    return _STATE.installed


def installed_config() -> HookConfig | None:
    return _STATE.config


def build_handler(error: BaseException | None) -> Handler:
    return _STATE.build_handler(error)
