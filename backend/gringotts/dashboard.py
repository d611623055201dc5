"""Assemble every dashboard output from a single portfolio snapshot."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .allocations import AllocationSlice, dimensions, weighted_allocations
from .history import HistoryPoint, value_history
from .models import AssetClass, PortfolioSnapshot
from .projection import ProjectionResult, project
from .valuation import (
    Valuation,
    gain_loss_ranking,
    total_cost,
    total_value,
    unrecognized_currencies,
    value_by_asset_class,
    value_holdings,
)
from .vesting import is_liquid


@dataclass(frozen=True)
class PortfolioStats:
    total_value: float
    total_cost: float
    liquid_value: float
    unvested_value: float

    @property
    def gain_loss(self) -> float:
        return self.total_value - self.total_cost

    @property
    def gain_loss_pct(self) -> float:
        if self.total_cost > 0:
            return self.gain_loss / self.total_cost * 100
        return 0.0


@dataclass(frozen=True)
class HoldingRow:
    id: str
    name: str
    ticker: Optional[str]
    asset_class: AssetClass
    quantity: float
    value: float
    cost: float
    gain_loss: float
    percent_return: float
    percent_of_portfolio: float
    liquid: bool
    growth_rate: float


@dataclass(frozen=True)
class Dashboard:
    stats: PortfolioStats
    rows: List[HoldingRow]
    allocations: Dict[str, List[AllocationSlice]]
    history: List[HistoryPoint]
    projection: ProjectionResult
    asset_classes: Dict[str, float]
    gain_loss_ranking: List[tuple[str, float]]
    warnings: List[str] = field(default_factory=list)


def portfolio_stats(snapshot: PortfolioSnapshot, valuations: Sequence[Valuation]) -> PortfolioStats:
    value = total_value(valuations)
    liquid = sum((v.value for v in valuations if is_liquid(v.holding, snapshot.as_of)), 0.0)
    return PortfolioStats(
        total_value=value,
        total_cost=total_cost(valuations),
        liquid_value=liquid,
        unvested_value=value - liquid,
    )


def holding_rows(snapshot: PortfolioSnapshot, valuations: Sequence[Valuation]) -> List[HoldingRow]:
    """Per-holding table rows sorted by value, largest first."""

    portfolio_value = total_value(valuations)
    rows = [
        HoldingRow(
            id=v.holding.id,
            name=v.holding.name,
            ticker=v.holding.ticker,
            asset_class=v.holding.asset_class,
            quantity=v.holding.quantity,
            value=v.value,
            cost=v.cost,
            gain_loss=v.gain_loss,
            percent_return=v.percent_return,
            percent_of_portfolio=(v.value / portfolio_value * 100) if portfolio_value > 0 else 0.0,
            liquid=is_liquid(v.holding, snapshot.as_of),
            growth_rate=snapshot.parameters.growth_rate_for(v.holding),
        )
        for v in valuations
    ]
    rows.sort(key=lambda row: row.value, reverse=True)
    return rows


def build_dashboard(
    snapshot: PortfolioSnapshot,
    *,
    allocation_dimensions: Sequence[str] = (),
) -> Dashboard:
    """Recompute every output from ``snapshot``.

    ``allocation_dimensions`` are always reported, even when no allocation
    uses them; dimensions found in the snapshot are added after them.
    """

    valuations = value_holdings(snapshot.holdings, snapshot.rates)

    requested = list(allocation_dimensions)
    for dimension in dimensions(snapshot.allocations):
        if dimension not in requested:
            requested.append(dimension)
    breakdowns = {
        dimension: weighted_allocations(
            valuations,
            snapshot.allocations,
            dimension,
            noise_threshold=snapshot.noise_threshold,
        )
        for dimension in requested
    }

    warnings = [
        f"Unrecognized currency {code}; values left unconverted"
        for code in unrecognized_currencies(valuations)
    ]

    return Dashboard(
        stats=portfolio_stats(snapshot, valuations),
        rows=holding_rows(snapshot, valuations),
        allocations=breakdowns,
        history=value_history(valuations, snapshot.as_of),
        projection=project(valuations, snapshot.parameters, snapshot.as_of),
        asset_classes=value_by_asset_class(valuations),
        gain_loss_ranking=gain_loss_ranking(valuations),
        warnings=warnings,
    )
