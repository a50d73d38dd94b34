"""
Fallible outcomes for code that collects failures instead of raising them
(batch runners, validators, aggregation). Both arms accept the Section API;
on Ok every attachment is a no-op.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeAlias, TypeVar

from colorreport.report import Report
from colorreport.section import HelpInfo, Section

__all__ = ["Ok", "Err", "Result", "catch"]

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Section, Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def wrap_err(self, message: object) -> Ok[T]:
        _ = message
        return self

    def wrap_err_with(self, fn: Callable[[], object]) -> Ok[T]:
        _ = fn
        return self

    def _attach(self, make: Callable[[], HelpInfo]) -> Ok[T]:
        _ = make
        return self


@dataclass(frozen=True, slots=True)
class Err(Section):
    exception: BaseException

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def report(self) -> Report:
        return Report.from_error(self.exception)

    def unwrap(self) -> NoReturn:
        raise self.report()

    def wrap_err(self, message: object) -> Err:
        return Err(self.report().wrap_err(message))

    def wrap_err_with(self, fn: Callable[[], object]) -> Err:
        return Err(self.report().wrap_err(fn()))

    def _attach(self, make: Callable[[], HelpInfo]) -> Err:
        report = self.report()
        report._attach(make)
        return Err(report)


Result: TypeAlias = Ok[T] | Err


def catch(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """Run `fn`, turning a raised Exception into Err."""
    try:
        return Ok(fn(*args, **kwargs))
    except Exception as e:
        return Err(e)
