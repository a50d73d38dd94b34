from __future__ import annotations

import pytest

from colorreport.config import Verbosity
from colorreport.errors import ChainWalkError
from colorreport.handler import Handler
from colorreport.render import render
from colorreport.report import Report, describe, iter_chain
from colorreport.section import SuggestionHelp


class ConfigError(Exception):
    pass


def _messages(report: Report) -> list[str]:
    return [describe(e) for e in report.chain()]


def test_report_from_message() -> None:
    r = Report("Unable to read config")
    assert str(r) == "Unable to read config"
    assert r.wrapped is None
    assert _messages(r) == ["Unable to read config"]


def test_report_wraps_exception_chain() -> None:
    try:
        try:
            raise FileNotFoundError("No such file or directory")
        except FileNotFoundError as e:
            raise ConfigError("bad config") from e
    except ConfigError as e:
        r = Report(e)
    assert str(r) == "bad config"
    assert _messages(r) == ["bad config", "No such file or directory"]


def test_implicit_context_is_followed_unless_suppressed() -> None:
    try:
        try:
            raise KeyError("k")
        except KeyError:
            raise ValueError("while handling")
    except ValueError as e:
        assert _messages(Report(e)) == ["while handling", "'k'"]

    try:
        try:
            raise KeyError("k")
        except KeyError:
            raise ValueError("fresh") from None
    except ValueError as e:
        assert _messages(Report(e)) == ["fresh"]


def test_report_raised_from_exception() -> None:
    try:
        try:
            raise OSError("disk on fire")
        except OSError as e:
            raise Report("Unable to save") from e
    except Report as r:
        assert _messages(r) == ["Unable to save", "disk on fire"]


def test_wrap_err_moves_handler_and_sections() -> None:
    inner = Report(ValueError("root")).suggestion("check the input")
    outer = inner.wrap_err("context")
    assert outer.handler is inner.handler
    assert outer.sections == [SuggestionHelp("check the input")]
    assert _messages(outer) == ["context", "root"]
    assert _messages(outer.wrap_err_with(lambda: "more")) == ["more", "context", "root"]


def test_report_of_report_does_not_nest() -> None:
    inner = Report(ValueError("root"))
    again = Report(inner)
    assert again.wrapped is inner.wrapped
    assert Report.from_error(inner) is inner


def test_report_of_report_keeps_sections() -> None:
    inner = Report("x").suggestion("keep me")
    again = Report(inner)
    assert again.sections == [SuggestionHelp("keep me")]
    assert render(again, Verbosity.MINIMAL) == "Error:\n   0: x\n\nSuggestion: keep me\n"


def test_downcast_and_root_cause() -> None:
    err = ConfigError("bad")
    err.__cause__ = FileNotFoundError("gone")
    r = Report(err).wrap_err("top")
    assert r.downcast(ConfigError) is err
    assert isinstance(r.root_cause(), FileNotFoundError)
    assert r.is_a(FileNotFoundError)
    assert r.downcast(KeyError) is None


def test_describe_falls_back_to_type_name() -> None:
    class Unprintable(Exception):
        def __str__(self) -> str:
            raise RuntimeError("no")

    assert describe(ValueError()) == "ValueError"
    assert describe(Unprintable()) == "<unprintable Unprintable object>"


def test_chain_walk_is_bounded() -> None:
    a = ValueError("a")
    a.__cause__ = a
    with pytest.raises(ChainWalkError) as info:
        list(iter_chain(a, limit=5))
    assert info.value.depth == 5


def test_report_before_install_has_empty_handler() -> None:
    r = Report("x")
    assert r.handler == Handler()
