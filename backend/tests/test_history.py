from datetime import date

import pytest

from gringotts import Holding, RateTable
from gringotts.history import value_history
from gringotts.valuation import value_holdings

AS_OF = date(2026, 10, 19)


def _valuations():
    holdings = [
        Holding(id="a", name="A", quantity=10, purchase_price=100, current_price=120, purchase_date=date(2026, 8, 10)),
        Holding(id="b", name="B", quantity=5, purchase_price=100, current_price=80, purchase_date=date(2026, 9, 30)),
        Holding(id="c", name="Undated", quantity=1, purchase_price=250, current_price=300),
    ]
    return value_holdings(holdings, RateTable())


def test_monthly_points_use_cost_basis_until_current_month():
    history = value_history(_valuations(), AS_OF)
    assert [p.label for p in history] == ["Aug 2026", "Sep 2026", "Oct 2026"]
    assert history[0].value == pytest.approx(1000)
    assert history[1].value == pytest.approx(1500)


def test_last_point_is_live_total_value():
    history = value_history(_valuations(), AS_OF)
    # includes the undated holding
    assert history[-1].value == pytest.approx(1200 + 400 + 300)


def test_year_boundary_is_crossed():
    holdings = [Holding(id="a", name="A", quantity=1, purchase_price=10, current_price=10,
                        purchase_date=date(2025, 11, 30))]
    history = value_history(value_holdings(holdings, RateTable()), date(2026, 2, 1))
    assert [p.month for p in history] == [date(2025, 11, 1), date(2025, 12, 1), date(2026, 1, 1), date(2026, 2, 1)]


def test_no_purchase_dates_yields_empty_history():
    holdings = [Holding(id="a", name="A", quantity=1, purchase_price=10, current_price=10)]
    assert value_history(value_holdings(holdings, RateTable()), AS_OF) == []
    assert value_history([], AS_OF) == []
