"""Approximate monthly portfolio value history.

The series is reconstructed from purchase dates only: every holding is
assumed to have been worth its cost basis from its purchase month until the
current month, where its live market value is used instead. Price movement
before ``as_of`` is ignored, so the curve understates the past value of
anything that has appreciated. It is not a literal historical valuation.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterator, List, Sequence

from .valuation import Valuation, total_value


@dataclass(frozen=True)
class HistoryPoint:
    month: date
    value: float

    @property
    def label(self) -> str:
        return self.month.strftime("%b %Y")


def _month_end(month: date) -> date:
    return month.replace(day=calendar.monthrange(month.year, month.month)[1])


def _months(start: date, end: date) -> Iterator[date]:
    cursor = start.replace(day=1)
    last = end.replace(day=1)
    while cursor <= last:
        yield cursor
        if cursor.month == 12:
            cursor = cursor.replace(year=cursor.year + 1, month=1)
        else:
            cursor = cursor.replace(month=cursor.month + 1)


def value_history(valuations: Sequence[Valuation], as_of: date) -> List[HistoryPoint]:
    """One point per month from the earliest purchase month to ``as_of``."""

    dated = [v for v in valuations if v.holding.purchase_date is not None]
    if not dated:
        return []

    earliest = min(v.holding.purchase_date for v in dated)  # type: ignore[type-var]
    current_month = as_of.replace(day=1)
    points: List[HistoryPoint] = []

    for month in _months(earliest, as_of):
        cutoff = _month_end(month)
        is_current = month == current_month
        month_value = 0.0
        for valuation in dated:
            if valuation.holding.purchase_date <= cutoff:  # type: ignore[operator]
                month_value += valuation.value if is_current else valuation.cost
        points.append(HistoryPoint(month=month, value=month_value))

    if points:
        last = points[-1]
        points[-1] = HistoryPoint(month=last.month, value=total_value(valuations))
    return points
