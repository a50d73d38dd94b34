from __future__ import annotations

import fnmatch
from dataclasses import dataclass
from typing import Literal

from lark import Lark, ParseTree, Token, Transformer, v_args
from lark.exceptions import LarkError

from colorreport.errors import DirectiveError
from colorreport.trace.filters import FrameFilter
from colorreport.trace.frames import Frame

from .grammar import DIRECTIVE_GRAMMAR

__all__ = ["FilterRule", "parse_directives", "directive_filter"]

Action = Literal["hide", "show"]
Field = Literal["module", "file", "name"]


@dataclass(frozen=True, slots=True)
class FilterRule:
    action: Action
    field: Field
    pattern: str

    def matches(self, frame: Frame) -> bool:
        if self.field == "module":
            value = frame.module or ""
        elif self.field == "file":
            value = frame.filename or ""
        else:
            value = frame.name
        return fnmatch.fnmatchcase(value, self.pattern)


class _DirectiveTransformer(Transformer[Token, list[FilterRule]]):
    def ACTION(self, tok: Token) -> str:
        return str(tok.value)

    def FIELD(self, tok: Token) -> str:
        return str(tok.value)

    def PATTERN(self, tok: Token) -> str:
        return str(tok.value)

    @v_args(inline=True)
    def rule(self, action: Action, field: Field, pattern: str) -> FilterRule:
        return FilterRule(action=action, field=field, pattern=pattern)

    def start(self, rules: list[FilterRule]) -> list[FilterRule]:
        return list(rules)


_PARSER = Lark(
    DIRECTIVE_GRAMMAR,
    start="start",
    parser="lalr",
    lexer="contextual",
    cache=False,
)


def parse_directives(text: str) -> tuple[FilterRule, ...]:
    """
    Parse `hide|show <field>=<glob>` rules separated by ';'.

        parse_directives("hide module=asyncio.*; show module=myapp.*")
    """
    body = text.strip().strip(";").strip()
    if not body:
        return ()
    try:
        tree: ParseTree = _PARSER.parse(body)
    except LarkError as e:
        raise DirectiveError(text, str(e).splitlines()[0] if str(e) else type(e).__name__) from e
    return tuple(_DirectiveTransformer().transform(tree))


def directive_filter(rules: tuple[FilterRule, ...]) -> FrameFilter:
    """The first matching rule decides; frames no rule mentions are kept."""

    def _keep(frame: Frame) -> bool:
        for r in rules:
            if r.matches(frame):
                return r.action == "show"
        return True

    return _keep
