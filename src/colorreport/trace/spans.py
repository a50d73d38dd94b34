"""
colorreport.trace.spans
=======================

Lightweight execution-scope tracing. `span(...)` and `@instrument` push a
record onto a context-local stack; `SpanTrace.capture()` snapshots the stack
that is active when a report is created.

Because the stack lives in a ContextVar, threads and asyncio tasks each see
their own spans.
"""

from __future__ import annotations

import contextvars
import functools
import inspect
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from types import TracebackType
from typing import Any, TypeVar, overload

from colorreport.trace.frames import Frame

__all__ = ["SpanRecord", "SpanTrace", "span", "instrument", "current_spans"]

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True, slots=True)
class SpanRecord:
    name: str
    filename: str | None = None
    lineno: int | None = None
    module: str | None = None
    fields: tuple[tuple[str, str], ...] = ()


_ACTIVE: contextvars.ContextVar[tuple[SpanRecord, ...]] = contextvars.ContextVar(
    "colorreport_active_spans", default=()
)


def current_spans() -> tuple[SpanRecord, ...]:
    """Active spans, outermost first."""
    return _ACTIVE.get()


def _format_fields(fields: Iterable[tuple[str, Any]]) -> tuple[tuple[str, str], ...]:
    return tuple((k, repr(v)) for k, v in fields)


class span:
    """
    Context manager entering a named span with optional key=value fields.

        with span("load_config", path=path):
            ...
    """

    def __init__(self, name: str, /, **fields: Any) -> None:
        caller = sys._getframe(1)
        self.record = SpanRecord(
            name=name,
            filename=caller.f_code.co_filename,
            lineno=caller.f_lineno,
            module=caller.f_globals.get("__name__"),
            fields=_format_fields(fields.items()),
        )
        self._token: contextvars.Token[tuple[SpanRecord, ...]] | None = None

    def __enter__(self) -> SpanRecord:
        self._token = _ACTIVE.set(_ACTIVE.get() + (self.record,))
        return self.record

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _ACTIVE.reset(self._token)
            self._token = None


def _record_for_call(
    fn: Callable[..., Any],
    sig: inspect.Signature,
    name: str,
    skip: frozenset[str],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> SpanRecord:
    try:
        bound = sig.bind(*args, **kwargs)
        bound.apply_defaults()
        items = [(k, v) for k, v in bound.arguments.items() if k not in skip]
    except TypeError:
        # let the real call raise the signature error
        items = []
    code = fn.__code__
    return SpanRecord(
        name=name,
        filename=code.co_filename,
        lineno=code.co_firstlineno,
        module=fn.__module__,
        fields=_format_fields(items),
    )


@overload
def instrument(fn: F, /) -> F: ...
@overload
def instrument(*, name: str | None = None, skip: Iterable[str] = ()) -> Callable[[F], F]: ...


def instrument(fn=None, /, *, name=None, skip=()):  # type: ignore[no-untyped-def]
    """
    Decorator: run every call of the function inside a span named after it,
    recording its arguments (minus `skip`) as fields.
    """
    skipped = frozenset(skip)

    def deco(f: F) -> F:
        span_name = name or f"{f.__module__}.{f.__qualname__}"
        sig = inspect.signature(f)

        if inspect.iscoroutinefunction(f):

            @functools.wraps(f)
            async def awrapper(*args: Any, **kwargs: Any) -> Any:
                rec = _record_for_call(f, sig, span_name, skipped, args, kwargs)
                token = _ACTIVE.set(_ACTIVE.get() + (rec,))
                try:
                    return await f(*args, **kwargs)
                finally:
                    _ACTIVE.reset(token)

            return awrapper  # type: ignore[return-value]

        @functools.wraps(f)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            rec = _record_for_call(f, sig, span_name, skipped, args, kwargs)
            token = _ACTIVE.set(_ACTIVE.get() + (rec,))
            try:
                return f(*args, **kwargs)
            finally:
                _ACTIVE.reset(token)

        return wrapper  # type: ignore[return-value]

    if fn is not None:
        return deco(fn)
    return deco


@dataclass(frozen=True, slots=True)
class SpanTrace:
    frames: tuple[Frame, ...]

    def __len__(self) -> int:
        return len(self.frames)

    @classmethod
    def capture(cls) -> SpanTrace:
        """Snapshot the active spans, innermost first."""
        active = _ACTIVE.get()
        return cls(
            tuple(
                Frame(
                    index=i,
                    name=rec.name,
                    module=rec.module,
                    filename=rec.filename,
                    lineno=rec.lineno,
                    fields=rec.fields,
                )
                for i, rec in enumerate(reversed(active))
            )
        )
