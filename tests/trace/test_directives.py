from __future__ import annotations

import pytest

from colorreport.errors import DirectiveError
from colorreport.trace.directives import FilterRule, directive_filter, parse_directives
from colorreport.trace.frames import Frame


def test_parse_single_and_multiple():
    assert parse_directives("hide module=asyncio.*") == (FilterRule("hide", "module", "asyncio.*"),)
    assert parse_directives(" hide file=*/vendor/* ; show name=app.* ;") == (
        FilterRule("hide", "file", "*/vendor/*"),
        FilterRule("show", "name", "app.*"),
    )


@pytest.mark.parametrize("text", ["", "   ", ";", " ; "])
def test_empty_directives(text: str):
    assert parse_directives(text) == ()


@pytest.mark.parametrize(
    "text",
    ["hide", "hide module", "hide module=", "drop module=x", "hide line=3", "hide module=x show name=y"],
)
def test_malformed_directives(text: str):
    with pytest.raises(DirectiveError) as info:
        parse_directives(text)
    assert info.value.directives == text


def test_first_matching_rule_wins():
    keep = directive_filter(parse_directives("show module=lib.core; hide module=lib.*"))
    assert keep(Frame(0, "x", module="lib.core"))
    assert not keep(Frame(0, "x", module="lib.util"))
    assert keep(Frame(0, "x", module="app"))


def test_rule_fields():
    frame = Frame(0, "app.main", module="app", filename="/src/app.py")
    assert FilterRule("hide", "name", "app.*").matches(frame)
    assert FilterRule("hide", "file", "*/app.py").matches(frame)
    assert not FilterRule("hide", "module", "lib").matches(frame)
