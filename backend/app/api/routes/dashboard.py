"""Dashboard endpoints backed by the valuation engine."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies.clients import get_app_settings, get_store
from app.config import AppSettings
from app.providers.record_store import RecordStoreClient, RecordStoreError
from app.schemas import DashboardRequest, DashboardResponse
from app.services.dashboard import compute_dashboard, dashboard_from_store, snapshot_from_request

router = APIRouter()


@router.post("/compute", response_model=DashboardResponse)
async def post_compute(
    payload: DashboardRequest,
    settings: AppSettings = Depends(get_app_settings),
) -> DashboardResponse:
    """Compute the dashboard for a snapshot supplied in the request body."""

    return compute_dashboard(settings, snapshot_from_request(settings, payload))


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    include_unvested: Optional[bool] = Query(default=None),
    default_growth_rate: Optional[float] = Query(default=None),
    horizon: Optional[int] = Query(default=None, ge=0),
    as_of: Optional[date] = Query(default=None),
    settings: AppSettings = Depends(get_app_settings),
    store: RecordStoreClient = Depends(get_store),
) -> DashboardResponse:
    """Load the latest records from the store and compute the dashboard."""

    parameters = settings.projection_parameters(
        include_unvested=include_unvested,
        default_growth_rate=default_growth_rate,
        horizon=horizon,
    )
    try:
        return await dashboard_from_store(settings, store, parameters=parameters, as_of=as_of)
    except RecordStoreError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


__all__ = ["get_dashboard", "post_compute"]
