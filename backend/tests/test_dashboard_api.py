"""Dashboard API tests."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.api.dependencies.clients import get_app_settings, get_store
from app.api.routes.dashboard import router as dashboard_router
from app.config import AppSettings
from app.providers.record_store import RecordStoreError
from gringotts import Allocation, Holding


def _settings() -> AppSettings:
    return AppSettings(fx_rates={"USD": 0.5}, reporting_currency="EUR", allocation_dimensions=["industry"])


def _app() -> FastAPI:
    app = FastAPI()
    app.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
    app.dependency_overrides[get_app_settings] = _settings
    return app


class StubStore:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail

    async def query_holdings(self) -> list[Holding]:
        if self.fail:
            raise RecordStoreError("store down", status_code=503)
        return [Holding(id="h1", name="Fund", quantity=2, purchase_price=50, current_price=100)]

    async def query_allocations(self) -> list[Allocation]:
        return [Allocation("h1", "industry", 100, "Health")]


@pytest.mark.asyncio
async def test_compute_endpoint_returns_full_dashboard():
    payload = {
        "as_of": "2026-10-19",
        "holdings": [
            {"id": "a", "name": "A", "quantity": 1, "purchase_price": 1000, "current_price": 1000,
             "growth_rate": 0},
            {"id": "b", "name": "B", "quantity": 1, "purchase_price": 1000, "current_price": 1000,
             "growth_rate": 0},
            {"id": "rsu", "name": "RSU", "quantity": 10, "purchase_price": 0, "current_price": 100,
             "currency": "USD", "vest_date": "2027-05-15", "growth_rate": 0},
        ],
        "allocations": [
            {"holding_id": "a", "dimension": "industry", "category": "Tech", "percentage": 60},
            {"holding_id": "a", "dimension": "industry", "category": "Finance", "percentage": 40},
            {"holding_id": "b", "dimension": "industry", "category": "Tech", "percentage": 100},
        ],
        "horizon": 4,
        "include_unvested": False,
    }

    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/dashboard/compute", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["reporting_currency"] == "EUR"
    assert body["stats"]["total_value"] == 2500
    assert body["stats"]["liquid_value"] == 2000
    assert body["stats"]["unvested_value"] == 500
    assert [row["id"] for row in body["holdings"]] == ["a", "b", "rsu"]

    industry = {s["category"]: s for s in body["allocations"]["industry"]}
    assert round(industry["Tech"]["percent"], 6) == 64.0
    assert round(industry["Finance"]["percent"], 6) == 16.0
    assert industry["Unclassified"]["unclassified"] is True

    projection = body["projection"]
    assert projection["labels"][0] == "Q4 2026"
    assert projection["liquid"] == [2000, 2000, 2500, 2500, 2500]
    assert projection["total"] == [2500] * 5
    first_year = projection["yearly"][0]
    assert first_year["is_baseline"] is True
    assert first_year["yoy_change_pct"] is None
    assert first_year["quarters"] == [None, None, None, 2000]


@pytest.mark.asyncio
async def test_compute_endpoint_rejects_invalid_percentage():
    payload = {
        "holdings": [{"id": "a", "name": "A", "quantity": 1, "purchase_price": 1}],
        "allocations": [{"holding_id": "a", "dimension": "industry", "category": "Tech", "percentage": 120}],
    }
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/dashboard/compute", json=payload)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_dashboard_loads_from_store():
    app = _app()
    app.dependency_overrides[get_store] = lambda: StubStore()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/dashboard", params={"horizon": 2, "as_of": "2026-10-19"})

    assert response.status_code == 200
    body = response.json()
    assert body["stats"]["total_value"] == 200
    assert body["allocations"]["industry"] == [{"category": "Health", "percent": 100.0, "unclassified": False}]
    assert len(body["projection"]["total"]) == 3
    assert body["history"] == []


@pytest.mark.asyncio
async def test_dashboard_store_failure_maps_to_bad_gateway():
    app = _app()
    app.dependency_overrides[get_store] = lambda: StubStore(fail=True)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/dashboard")
    assert response.status_code == 502
    assert "store down" in response.json()["detail"]
