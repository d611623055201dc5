"""Record-store page parsing tests."""

from __future__ import annotations

from datetime import date

from app.schemas.records import parse_allocations, parse_holdings
from gringotts import AssetClass


def _holding_page(page_id: str = "page-1", **overrides) -> dict:
    properties = {
        "name": {"title": [{"text": {"content": "Vanguard FTSE"}}]},
        "ticker": {"rich_text": [{"text": {"content": "VWCE.DE"}}]},
        "quantity": {"number": 12},
        "purchase_price": {"number": 95.5},
        "purchase_date": {"date": {"start": "2024-02-01"}},
        "current_price": {"number": 110.0},
        "currency": {"select": {"name": "usd"}},
        "asset_type": {"select": {"name": "etf"}},
        "vest_date": {"date": None},
        "last_price_update": {"date": {"start": "2026-10-18T09:00:00.000+00:00"}},
        "notes": {"rich_text": []},
    }
    properties.update(overrides)
    return {"id": page_id, "url": f"https://store.test/{page_id}", "properties": properties}


def test_holding_page_is_parsed_into_domain_model():
    [holding] = parse_holdings([_holding_page()])
    assert holding.id == "page-1"
    assert holding.name == "Vanguard FTSE"
    assert holding.ticker == "VWCE.DE"
    assert holding.quantity == 12
    assert holding.currency == "USD"
    assert holding.asset_class is AssetClass.ETF
    assert holding.purchase_date == date(2024, 2, 1)
    assert holding.vest_date is None
    assert holding.last_price_update == date(2026, 10, 18)
    assert holding.notes is None
    assert holding.growth_rate is None


def test_unknown_asset_type_maps_to_other():
    [holding] = parse_holdings([_holding_page(asset_type={"select": {"name": "collectible"}})])
    assert holding.asset_class is AssetClass.OTHER


def test_malformed_holdings_are_skipped():
    pages = [
        _holding_page("ok"),
        _holding_page("negative", quantity={"number": -1}),
        _holding_page("missing", purchase_price={"number": None}),
    ]
    assert [h.id for h in parse_holdings(pages)] == ["ok"]


def test_allocation_page_yields_one_allocation_per_holding():
    page = {
        "id": "alloc-1",
        "properties": {
            "name": {"title": [{"text": {"content": "Tech (industry)"}}]},
            "investments": {"relation": [{"id": "h1"}, {"id": "h2"}]},
            "allocation_type": {"select": {"name": "industry"}},
            "category": {"select": {"name": "Tech"}},
            "percentage": {"number": 42.5},
        },
    }
    allocations = parse_allocations([page])
    assert [a.holding_id for a in allocations] == ["h1", "h2"]
    assert all(a.dimension == "industry" and a.category == "Tech" and a.percentage == 42.5 for a in allocations)


def test_out_of_range_allocation_is_rejected():
    page = {
        "id": "alloc-2",
        "properties": {
            "investments": {"relation": [{"id": "h1"}]},
            "allocation_type": {"select": {"name": "industry"}},
            "category": {"select": {"name": "Tech"}},
            "percentage": {"number": 140},
        },
    }
    assert parse_allocations([page]) == []
