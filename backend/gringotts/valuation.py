"""Per-holding and portfolio-wide valuation in the reporting currency."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from .fx import RateTable
from .models import Holding


@dataclass(frozen=True)
class Valuation:
    holding: Holding
    value: float
    cost: float
    recognized_currency: bool = True

    @property
    def gain_loss(self) -> float:
        return self.value - self.cost

    @property
    def percent_return(self) -> float:
        if self.cost > 0:
            return self.gain_loss / self.cost * 100
        return 0.0


def current_value(holding: Holding, rates: RateTable) -> float:
    """Market value of ``holding``; unpriced holdings are worth zero."""

    amount = holding.quantity * (holding.current_price or 0.0)
    return rates.to_reporting_currency(amount, holding.currency).amount


def cost_basis(holding: Holding, rates: RateTable) -> float:
    amount = holding.quantity * holding.purchase_price
    return rates.to_reporting_currency(amount, holding.currency).amount


def gain_loss(holding: Holding, rates: RateTable) -> float:
    return current_value(holding, rates) - cost_basis(holding, rates)


def percent_return(holding: Holding, rates: RateTable) -> float:
    cost = cost_basis(holding, rates)
    if cost > 0:
        return (current_value(holding, rates) - cost) / cost * 100
    return 0.0


def value_holding(holding: Holding, rates: RateTable) -> Valuation:
    return Valuation(
        holding=holding,
        value=current_value(holding, rates),
        cost=cost_basis(holding, rates),
        recognized_currency=rates.is_recognized(holding.currency),
    )


def value_holdings(holdings: Iterable[Holding], rates: RateTable) -> List[Valuation]:
    return [value_holding(h, rates) for h in holdings]


def total_value(valuations: Iterable[Valuation]) -> float:
    return sum((v.value for v in valuations), 0.0)


def total_cost(valuations: Iterable[Valuation]) -> float:
    return sum((v.cost for v in valuations), 0.0)


def unrecognized_currencies(valuations: Iterable[Valuation]) -> List[str]:
    """Sorted, de-duplicated currency codes that could not be converted."""

    return sorted(
        {(v.holding.currency or "").upper() for v in valuations if not v.recognized_currency}
    )


def value_by_asset_class(valuations: Sequence[Valuation]) -> Dict[str, float]:
    """Group current value by asset class; keys are sorted alphabetically."""

    grouped: Dict[str, float] = {}
    for valuation in valuations:
        key = valuation.holding.asset_class.value
        grouped[key] = grouped.get(key, 0.0) + valuation.value
    return {key: grouped[key] for key in sorted(grouped)}


def gain_loss_ranking(valuations: Sequence[Valuation]) -> List[tuple[str, float]]:
    """Per-holding gain/loss, best performer first."""

    ranked = [(v.holding.label, v.gain_loss) for v in valuations]
    ranked.sort(key=lambda item: item[1], reverse=True)
    return ranked
