"""Load a portfolio snapshot and run the valuation engine over it."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Iterable

from opentelemetry import trace

from app.config import AppSettings
from app.providers.record_store import RecordStoreClient
from app.schemas import DashboardRequest, DashboardResponse
from gringotts import Allocation, Holding, PortfolioSnapshot, ProjectionParameters, RateTable, build_dashboard

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


async def load_records(store: RecordStoreClient) -> tuple[list[Holding], list[Allocation]]:
    """Fetch holdings and allocations concurrently; both must finish before use."""

    holdings, allocations = await asyncio.gather(store.query_holdings(), store.query_allocations())
    logger.info("Loaded %s holdings and %s allocations", len(holdings), len(allocations))
    return holdings, allocations


def build_snapshot(
    settings: AppSettings,
    holdings: Iterable[Holding],
    allocations: Iterable[Allocation],
    *,
    rates: RateTable | None = None,
    parameters: ProjectionParameters | None = None,
    as_of: date | None = None,
) -> PortfolioSnapshot:
    return PortfolioSnapshot(
        holdings=tuple(holdings),
        allocations=tuple(allocations),
        rates=rates or settings.rate_table(),
        parameters=parameters or settings.projection_parameters(),
        as_of=as_of or date.today(),
        noise_threshold=settings.allocation_noise_threshold,
    )


def compute_dashboard(settings: AppSettings, snapshot: PortfolioSnapshot) -> DashboardResponse:
    """Run the full, synchronous recomputation for ``snapshot``."""

    with tracer.start_as_current_span("dashboard.compute") as span:
        span.set_attribute("portfolio.holdings", len(snapshot.holdings))
        span.set_attribute("portfolio.allocations", len(snapshot.allocations))
        dashboard = build_dashboard(snapshot, allocation_dimensions=settings.allocation_dimensions)
    for warning in dashboard.warnings:
        logger.warning(warning)
    return DashboardResponse.from_dashboard(
        dashboard,
        reporting_currency=snapshot.rates.reporting_currency,
        as_of=snapshot.as_of,
    )


def snapshot_from_request(settings: AppSettings, request: DashboardRequest) -> PortfolioSnapshot:
    parameters = settings.projection_parameters(
        default_growth_rate=request.default_growth_rate,
        include_unvested=request.include_unvested,
        horizon=request.horizon,
        growth_overrides=dict(request.growth_overrides),
    )
    return build_snapshot(
        settings,
        [h.to_domain() for h in request.holdings],
        [a.to_domain() for a in request.allocations],
        rates=settings.rate_table(request.fx_rates),
        parameters=parameters,
        as_of=request.as_of,
    )


async def dashboard_from_store(
    settings: AppSettings,
    store: RecordStoreClient,
    *,
    parameters: ProjectionParameters | None = None,
    as_of: date | None = None,
) -> DashboardResponse:
    holdings, allocations = await load_records(store)
    snapshot = build_snapshot(settings, holdings, allocations, parameters=parameters, as_of=as_of)
    return compute_dashboard(settings, snapshot)


__all__ = [
    "build_snapshot",
    "compute_dashboard",
    "dashboard_from_store",
    "load_records",
    "snapshot_from_request",
]
