"""Weighted allocation aggregation tests."""

from __future__ import annotations

import pytest

from gringotts import UNCLASSIFIED, Allocation, Holding, RateTable
from gringotts.allocations import weighted_allocations
from gringotts.valuation import value_holdings

RATES = RateTable()


def _holding(holding_id: str, value: float) -> Holding:
    return Holding(id=holding_id, name=holding_id, quantity=1, purchase_price=value, current_price=value)


def test_equal_weights_combine_declared_percentages():
    valuations = value_holdings([_holding("a", 1000), _holding("b", 1000)], RATES)
    allocations = [
        Allocation("a", "industry", 60, "Tech"),
        Allocation("a", "industry", 40, "Finance"),
        Allocation("b", "industry", 100, "Tech"),
    ]
    slices = weighted_allocations(valuations, allocations, "industry")
    assert [s.category for s in slices] == ["Tech", "Finance"]
    assert slices[0].percent == pytest.approx(80)
    assert slices[1].percent == pytest.approx(20)
    assert not any(s.unclassified for s in slices)


def test_holdings_without_allocations_go_to_unclassified():
    valuations = value_holdings([_holding("a", 3000), _holding("b", 1000)], RATES)
    allocations = [Allocation("a", "industry", 100, "Energy")]
    slices = weighted_allocations(valuations, allocations, "industry")
    by_category = {s.category: s.percent for s in slices}
    assert by_category[UNCLASSIFIED] == 25.0
    assert by_category["Energy"] == pytest.approx(75)


def test_unclassified_is_not_a_plain_string():
    valuations = value_holdings([_holding("a", 100)], RATES)
    allocations = [Allocation("a", "industry", 100, "Unclassified")]
    slices = weighted_allocations(valuations, allocations, "industry")
    assert slices[0].category == "Unclassified"
    assert slices[0].unclassified is False


def test_partial_allocation_is_not_redistributed():
    valuations = value_holdings([_holding("a", 1000)], RATES)
    allocations = [Allocation("a", "industry", 50, "Tech")]
    slices = weighted_allocations(valuations, allocations, "industry")
    assert len(slices) == 1
    assert slices[0].category == "Tech"
    assert slices[0].percent == pytest.approx(50)


def test_other_dimensions_are_ignored_and_missing_category_defaults_to_other():
    valuations = value_holdings([_holding("a", 1000)], RATES)
    allocations = [
        Allocation("a", "geography", 100, "Europe"),
        Allocation("a", "industry", 30, None),
    ]
    slices = weighted_allocations(valuations, allocations, "industry")
    assert [(s.category, s.percent) for s in slices] == [("Other", pytest.approx(30))]


def test_noise_is_dropped():
    valuations = value_holdings([_holding("a", 10000), _holding("b", 5)], RATES)
    allocations = [Allocation("a", "industry", 100, "Tech")]
    slices = weighted_allocations(valuations, allocations, "industry")
    assert [s.category for s in slices] == ["Tech"]


def test_zero_total_value_returns_empty():
    valuations = value_holdings([Holding(id="a", name="a", quantity=1, purchase_price=10)], RATES)
    assert weighted_allocations(valuations, [], "industry") == []
    assert weighted_allocations([], [], "industry") == []
