"""Price refresh endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies.clients import get_app_settings, get_price_feed, get_store
from app.config import AppSettings
from app.providers.price_feed import PriceFeedClient
from app.providers.record_store import RecordStoreClient, RecordStoreError
from app.schemas import PriceRefreshResponse
from app.services.prices import refresh_prices

router = APIRouter()


@router.post("/refresh", response_model=PriceRefreshResponse)
async def post_refresh(
    settings: AppSettings = Depends(get_app_settings),
    store: RecordStoreClient = Depends(get_store),
    feed: PriceFeedClient = Depends(get_price_feed),
) -> PriceRefreshResponse:
    """Fetch fresh prices for every ticker and write them to the store."""

    try:
        return await refresh_prices(store, feed, delay_seconds=settings.price_fetch_delay_seconds)
    except RecordStoreError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


__all__ = ["post_refresh"]
