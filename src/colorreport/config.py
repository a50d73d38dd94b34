"""
colorreport.config
==================

Configuration surface for the installed hooks.

- Verbosity and its environment resolution
- Theme (msgspec Struct, loadable from JSON/TOML)
- HookConfig (frozen, what the installed hook reads)
- HookBuilder (fluent construction + install)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING

import msgspec
import msgspec.json
import msgspec.toml

from colorreport.constants import (
    BACKTRACE_ENV,
    FRAME_FILTER_ENV,
    LIB_BACKTRACE_ENV,
    SHOW_HIDDEN_ENV,
    SPANTRACE_ENV,
)
from colorreport.errors import DirectiveError
from colorreport.trace.directives import directive_filter, parse_directives
from colorreport.trace.filters import FrameFilter, default_filters

if TYPE_CHECKING:
    from colorreport.hooks import PanicInfo

logger = logging.getLogger(__name__)

__all__ = [
    "Verbosity",
    "lib_verbosity",
    "span_trace_enabled",
    "show_hidden",
    "Theme",
    "load_theme",
    "PanicMessage",
    "HookConfig",
    "HookBuilder",
]

Env = Mapping[str, str]


# ────────────────────────── Verbosity ──────────────────────────


class Verbosity(IntEnum):
    MINIMAL = 0
    SHORT = 1
    FULL = 2

    @classmethod
    def parse(cls, value: str) -> Verbosity:
        """'full' -> FULL, '0' -> MINIMAL, anything else (empty included) -> SHORT."""
        v = value.strip().lower()
        if v == "full":
            return cls.FULL
        if v == "0":
            return cls.MINIMAL
        return cls.SHORT


def lib_verbosity(env: Env | None = None) -> Verbosity:
    """Report verbosity: LIB_BACKTRACE, then BACKTRACE, default MINIMAL."""
    env = os.environ if env is None else env
    for name in (LIB_BACKTRACE_ENV, BACKTRACE_ENV):
        value = env.get(name)
        if value is not None:
            return Verbosity.parse(value)
    return Verbosity.MINIMAL


def span_trace_enabled(default: bool = True, env: Env | None = None) -> bool:
    """An explicit '0' disables capture; any other value enables it."""
    env = os.environ if env is None else env
    value = env.get(SPANTRACE_ENV)
    if value is None:
        return default
    return value.strip() != "0"


def show_hidden(env: Env | None = None) -> bool:
    env = os.environ if env is None else env
    return env.get(SHOW_HIDDEN_ENV, "").strip() == "1"


# ─────────────────────── Theme ───────────────────────


class Theme(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """Rich style strings for every role a report renders."""

    header: str = "bold red"
    error: str = "red"
    help_label: str = "cyan"
    warning_label: str = "yellow"
    note_label: str = "cyan"
    section_header: str = "bold"
    trace_title: str = "dim"
    span_name: str = "red"
    span_fields: str = "cyan"
    frame_name: str = "red"
    file: str = "magenta"
    line_number: str = "magenta"
    source_line: str = ""
    active_line: str = "bold"
    hidden_frames: str = "cyan"
    panic_header: str = "bold red"
    failed_section: str = "italic red"

    @classmethod
    def dark(cls) -> Theme:
        return cls()

    @classmethod
    def blank(cls) -> Theme:
        """No styling at all; output is identical to the plain text form."""
        return cls(**{name: "" for name in cls.__struct_fields__})


def load_theme(path: str | Path) -> Theme:
    """Decode a Theme from a .json or .toml file. Missing roles keep their defaults."""
    p = Path(path)
    data = p.read_bytes()
    if p.suffix.lower() == ".toml":
        return msgspec.toml.decode(data, type=Theme)
    return msgspec.json.decode(data, type=Theme)


# ─────────────────────── Hook configuration ───────────────────────

PanicMessage = Callable[["PanicInfo"], str]


@dataclass(frozen=True, slots=True)
class HookConfig:
    theme: Theme = field(default_factory=Theme.dark)
    filters: tuple[FrameFilter, ...] = field(default_factory=default_filters)
    # None defers to the environment at capture time
    capture_backtrace: bool | None = None
    capture_span_trace: bool | None = None
    capture_span_trace_by_default: bool = True
    display_env_section: bool = True
    panic_message: PanicMessage | None = None

    def should_capture_backtrace(self, env: Env | None = None) -> bool:
        if self.capture_backtrace is not None:
            return self.capture_backtrace
        return lib_verbosity(env) >= Verbosity.SHORT

    def should_capture_span_trace(self, env: Env | None = None) -> bool:
        if self.capture_span_trace is not None:
            return self.capture_span_trace
        return span_trace_enabled(self.capture_span_trace_by_default, env)


class HookBuilder:
    """
    Fluent builder for HookConfig.

        HookBuilder().theme(Theme.blank()).add_frame_filter(my_filter).install()
    """

    def __init__(self, config: HookConfig | None = None) -> None:
        self._config = config or HookConfig()

    def theme(self, theme: Theme) -> HookBuilder:
        self._config = replace(self._config, theme=theme)
        return self

    def add_frame_filter(self, f: FrameFilter) -> HookBuilder:
        self._config = replace(self._config, filters=self._config.filters + (f,))
        return self

    def add_default_filters(self) -> HookBuilder:
        self._config = replace(self._config, filters=self._config.filters + default_filters())
        return self

    def clear_filters(self) -> HookBuilder:
        self._config = replace(self._config, filters=())
        return self

    def add_directives(self, directives: str) -> HookBuilder:
        """Add a filter from directive text; raises DirectiveError when malformed."""
        return self.add_frame_filter(directive_filter(parse_directives(directives)))

    def add_env_directives(self, env: Env | None = None) -> HookBuilder:
        env = os.environ if env is None else env
        text = env.get(FRAME_FILTER_ENV)
        if not text:
            return self
        try:
            return self.add_directives(text)
        except DirectiveError as e:
            logger.warning("ignoring %s: %s", FRAME_FILTER_ENV, e)
            return self

    def capture_span_trace_by_default(self, enabled: bool) -> HookBuilder:
        self._config = replace(self._config, capture_span_trace_by_default=enabled)
        return self

    def capture_span_trace(self, enabled: bool | None) -> HookBuilder:
        self._config = replace(self._config, capture_span_trace=enabled)
        return self

    def capture_backtrace(self, enabled: bool | None) -> HookBuilder:
        self._config = replace(self._config, capture_backtrace=enabled)
        return self

    def display_env_section(self, enabled: bool) -> HookBuilder:
        self._config = replace(self._config, display_env_section=enabled)
        return self

    def panic_message(self, fmt: PanicMessage) -> HookBuilder:
        self._config = replace(self._config, panic_message=fmt)
        return self

    def build(self) -> HookConfig:
        return self._config

    def install(self) -> HookConfig:
        """Install the hooks process-wide. Raises AlreadyInstalledError on reuse."""
        from colorreport.hooks import install

        return install(self.add_env_directives().build())
