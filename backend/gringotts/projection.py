"""Quarterly compounding projection with a vesting cutover."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence, Union

from .models import BASELINE, ProjectionParameters, Sentinel
from .valuation import Valuation
from .vesting import is_vested_by, quarter_index, vesting_offset

QUARTERS_PER_YEAR = 4

YearOverYear = Union[float, Sentinel, None]


def quarterly_rate(annual_rate_pct: float) -> float:
    """Convert an annual percentage rate to the compounding quarterly rate.

    Rates at or below -100% wipe the holding out instead of producing a
    complex root.
    """

    base = 1 + annual_rate_pct / 100
    if base <= 0:
        return -1.0
    return base ** (1 / QUARTERS_PER_YEAR) - 1


@dataclass(frozen=True)
class _Track:
    value: float
    rate: float
    offset: Optional[int]

    def grown(self, period: int) -> float:
        return self.value * (1 + self.rate) ** period

    def vested_by(self, period: int) -> bool:
        return is_vested_by(self.offset, period)


@dataclass(frozen=True)
class ProjectionPoint:
    period: int
    year: int
    quarter: int
    liquid: float
    unvested: float

    @property
    def total(self) -> float:
        return self.liquid + self.unvested

    @property
    def label(self) -> str:
        return f"Q{self.quarter + 1} {self.year}"


@dataclass
class YearRow:
    year: int
    quarters: List[Optional[float]] = field(default_factory=lambda: [None] * QUARTERS_PER_YEAR)
    year_over_year: YearOverYear = None

    @property
    def year_end(self) -> Optional[float]:
        for value in reversed(self.quarters):
            if value is not None:
                return value
        return None

    @property
    def is_baseline(self) -> bool:
        return self.year_over_year is BASELINE


@dataclass(frozen=True)
class ProjectionResult:
    points: List[ProjectionPoint]
    yearly: List[YearRow]
    include_unvested: bool

    @property
    def labels(self) -> List[str]:
        return [p.label for p in self.points]

    @property
    def liquid(self) -> List[float]:
        return [p.liquid for p in self.points]

    @property
    def total(self) -> List[float]:
        return [p.total for p in self.points]


def _yearly_table(points: Sequence[ProjectionPoint], include_unvested: bool) -> List[YearRow]:
    rows: List[YearRow] = []
    for point in points:
        if not rows or rows[-1].year != point.year:
            rows.append(YearRow(year=point.year))
        rows[-1].quarters[point.quarter] = point.total if include_unvested else point.liquid

    for index, row in enumerate(rows):
        if index == 0:
            row.year_over_year = BASELINE
            continue
        previous_end = rows[index - 1].year_end
        current_end = row.year_end
        if previous_end is None or previous_end <= 0 or not current_end:
            row.year_over_year = None
        else:
            row.year_over_year = (current_end - previous_end) / previous_end * 100
    return rows


def project(
    valuations: Sequence[Valuation],
    parameters: ProjectionParameters,
    as_of: date,
) -> ProjectionResult:
    """Compound every holding forward ``parameters.horizon`` quarters.

    Period 0 is the current calendar quarter. A holding joins the liquid
    series in the quarter it vests and stays there; there is no partial
    vesting.
    """

    tracks = [
        _Track(
            value=v.value,
            rate=quarterly_rate(parameters.growth_rate_for(v.holding)),
            offset=vesting_offset(v.holding, as_of),
        )
        for v in valuations
    ]

    start_quarter = quarter_index(as_of)
    points: List[ProjectionPoint] = []
    for period in range(max(parameters.horizon, 0) + 1):
        absolute = start_quarter + period
        liquid_total = 0.0
        unvested_total = 0.0
        for track in tracks:
            grown = track.grown(period)
            if track.vested_by(period):
                liquid_total += grown
            else:
                unvested_total += grown
        points.append(
            ProjectionPoint(
                period=period,
                year=as_of.year + absolute // QUARTERS_PER_YEAR,
                quarter=absolute % QUARTERS_PER_YEAR,
                liquid=liquid_total,
                unvested=unvested_total,
            )
        )

    return ProjectionResult(
        points=points,
        yearly=_yearly_table(points, parameters.include_unvested),
        include_unvested=parameters.include_unvested,
    )
