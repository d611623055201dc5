"""Value-weighted category breakdowns across the whole portfolio."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Union

from .models import UNCLASSIFIED, Allocation, Sentinel
from .valuation import Valuation, total_value

DEFAULT_CATEGORY = "Other"
NOISE_THRESHOLD = 0.1

Category = Union[str, Sentinel]


@dataclass(frozen=True)
class AllocationSlice:
    category: Category
    percent: float

    @property
    def unclassified(self) -> bool:
        return self.category is UNCLASSIFIED

    @property
    def label(self) -> str:
        return str(self.category)


def _group_by_holding(allocations: Iterable[Allocation], dimension: str) -> Dict[str, List[Allocation]]:
    grouped: Dict[str, List[Allocation]] = {}
    for allocation in allocations:
        if allocation.dimension != dimension:
            continue
        grouped.setdefault(allocation.holding_id, []).append(allocation)
    return grouped


def weighted_allocations(
    valuations: Sequence[Valuation],
    allocations: Iterable[Allocation],
    dimension: str,
    *,
    noise_threshold: float = NOISE_THRESHOLD,
) -> List[AllocationSlice]:
    """Distribute each holding's value share across the categories of ``dimension``.

    Holdings with no allocation for the dimension are attributed wholly to the
    ``UNCLASSIFIED`` bucket. Holdings that are only partly classified keep
    their declared fraction; the remainder is not redistributed.
    """

    portfolio_value = total_value(valuations)
    if portfolio_value == 0:
        return []

    by_holding = _group_by_holding(allocations, dimension)
    weighted: Dict[Category, float] = {}

    for valuation in valuations:
        weight = valuation.value / portfolio_value
        matching = by_holding.get(valuation.holding.id, [])
        if not matching:
            weighted[UNCLASSIFIED] = weighted.get(UNCLASSIFIED, 0.0) + weight * 100
            continue
        for allocation in matching:
            category: Category = allocation.category or DEFAULT_CATEGORY
            weighted[category] = weighted.get(category, 0.0) + weight * (allocation.percentage or 0.0)

    slices = [
        AllocationSlice(category=category, percent=percent)
        for category, percent in weighted.items()
        if percent > noise_threshold
    ]
    slices.sort(key=lambda s: s.percent, reverse=True)
    return slices


def dimensions(allocations: Iterable[Allocation]) -> List[str]:
    """Distinct dimension tags present in ``allocations``."""

    return sorted({a.dimension for a in allocations})
