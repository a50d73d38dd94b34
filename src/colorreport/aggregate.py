"""
Fold several independent failures into one report.

Batch runners and parsers often hit more than one error; Python's causal
chain can only hold one. Instead each failure rides along as an ErrorHelp
section on a single aggregate report.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import reduce

from colorreport.constants import AGGREGATE_MESSAGE
from colorreport.report import Report
from colorreport.result import Err, Ok, Result

__all__ = ["join_errors", "from_exception_group"]


def join_errors(outcomes: Iterable[Result[object]], message: str = AGGREGATE_MESSAGE) -> Result[None]:
    """
    Ok(None) if every outcome is Ok, otherwise Err(report) where the report
    carries one error section per failed outcome, in input order.
    """
    failures = [o.exception for o in outcomes if isinstance(o, Err)]
    if not failures:
        return Ok(None)
    return reduce(lambda acc, e: acc.error(e), failures, Err(Report(message)))


def from_exception_group(group: BaseExceptionGroup[BaseException]) -> Report:
    """Same fold over an ExceptionGroup; the group's message heads the report."""
    report = Report(group.message or AGGREGATE_MESSAGE)
    for exc in group.exceptions:
        report.error(exc)
    return report
