from __future__ import annotations

import logging
from pathlib import Path

import msgspec
import pytest

from colorreport.config import (
    HookBuilder,
    HookConfig,
    Theme,
    Verbosity,
    lib_verbosity,
    load_theme,
    show_hidden,
    span_trace_enabled,
)
from colorreport.errors import DirectiveError
from colorreport.trace.frames import Frame


# --- Verbosity ------------------------------------------------------------------


def test_verbosity_is_ordered() -> None:
    assert Verbosity.MINIMAL < Verbosity.SHORT < Verbosity.FULL


@pytest.mark.parametrize(
    "env,expected",
    [
        ({}, Verbosity.MINIMAL),
        ({"COLORREPORT_BACKTRACE": "1"}, Verbosity.SHORT),
        ({"COLORREPORT_BACKTRACE": "full"}, Verbosity.FULL),
        ({"COLORREPORT_BACKTRACE": "FULL"}, Verbosity.FULL),
        ({"COLORREPORT_BACKTRACE": "0"}, Verbosity.MINIMAL),
        # set but empty still asks for a backtrace
        ({"COLORREPORT_BACKTRACE": ""}, Verbosity.SHORT),
        # the library variable wins
        ({"COLORREPORT_BACKTRACE": "full", "COLORREPORT_LIB_BACKTRACE": "0"}, Verbosity.MINIMAL),
        ({"COLORREPORT_BACKTRACE": "0", "COLORREPORT_LIB_BACKTRACE": "yes"}, Verbosity.SHORT),
    ],
)
def test_lib_verbosity_resolution(env: dict[str, str], expected: Verbosity) -> None:
    assert lib_verbosity(env) == expected


def test_lib_verbosity_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COLORREPORT_BACKTRACE", "full")
    assert lib_verbosity() == Verbosity.FULL


@pytest.mark.parametrize(
    "env,default,expected",
    [
        ({}, True, True),
        ({}, False, False),
        ({"COLORREPORT_SPANTRACE": "0"}, True, False),
        ({"COLORREPORT_SPANTRACE": "1"}, False, True),
    ],
)
def test_span_trace_toggle(env: dict[str, str], default: bool, expected: bool) -> None:
    assert span_trace_enabled(default, env) is expected


def test_show_hidden() -> None:
    assert show_hidden({"COLORREPORT_SHOW_HIDDEN": "1"})
    assert not show_hidden({})


# --- Theme ----------------------------------------------------------------------


def test_blank_theme_has_no_styles() -> None:
    blank = Theme.blank()
    assert all(getattr(blank, name) == "" for name in Theme.__struct_fields__)
    assert Theme.dark() == Theme()


def test_load_theme_json_and_toml(tmp_path: Path) -> None:
    js = tmp_path / "theme.json"
    js.write_text('{"error": "bold magenta"}')
    theme = load_theme(js)
    assert theme.error == "bold magenta"
    assert theme.header == Theme().header

    tm = tmp_path / "theme.toml"
    tm.write_text('file = "green"\n')
    assert load_theme(tm).file == "green"


def test_load_theme_rejects_unknown_roles(tmp_path: Path) -> None:
    js = tmp_path / "theme.json"
    js.write_text('{"not_a_role": "red"}')
    with pytest.raises(msgspec.ValidationError):
        load_theme(js)


# --- HookConfig / HookBuilder ---------------------------------------------------


def test_capture_decisions() -> None:
    cfg = HookConfig()
    assert not cfg.should_capture_backtrace({})
    assert cfg.should_capture_backtrace({"COLORREPORT_BACKTRACE": "1"})
    assert cfg.should_capture_span_trace({})
    assert not cfg.should_capture_span_trace({"COLORREPORT_SPANTRACE": "0"})

    forced = HookConfig(capture_backtrace=True, capture_span_trace=False)
    assert forced.should_capture_backtrace({})
    assert not forced.should_capture_span_trace({})


def test_builder_is_fluent() -> None:
    fmt = lambda info: "crashed"  # noqa: E731
    cfg = (
        HookBuilder()
        .theme(Theme.blank())
        .clear_filters()
        .add_directives("hide module=noisy.*")
        .display_env_section(False)
        .capture_span_trace_by_default(False)
        .panic_message(fmt)
        .build()
    )
    assert cfg.theme == Theme.blank()
    assert len(cfg.filters) == 1
    assert not cfg.filters[0](Frame(0, "noisy.fn", module="noisy.core"))
    assert cfg.filters[0](Frame(0, "app.fn", module="app"))
    assert cfg.display_env_section is False
    assert cfg.should_capture_span_trace({}) is False
    assert cfg.panic_message is fmt


def test_builder_rejects_bad_directives() -> None:
    with pytest.raises(DirectiveError):
        HookBuilder().add_directives("hide everything")


def test_bad_env_directives_are_ignored(caplog: pytest.LogCaptureFixture) -> None:
    before = len(HookConfig().filters)
    with caplog.at_level(logging.WARNING, logger="colorreport.config"):
        cfg = HookBuilder().add_env_directives({"COLORREPORT_FRAME_FILTER": "nonsense"}).build()
    assert len(cfg.filters) == before
    assert "COLORREPORT_FRAME_FILTER" in caplog.text


def test_env_directives_are_added() -> None:
    cfg = HookBuilder().add_env_directives({"COLORREPORT_FRAME_FILTER": "hide name=*secret*"}).build()
    assert len(cfg.filters) == len(HookConfig().filters) + 1
