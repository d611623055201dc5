"""Dependencies that hand out external clients per request."""

from __future__ import annotations

from typing import AsyncIterator

from app.config import AppSettings, get_settings
from app.providers.price_feed import PriceFeedClient, get_price_feed_client
from app.providers.record_store import RecordStoreClient, get_record_store_client


def get_app_settings() -> AppSettings:
    return get_settings()


async def get_store() -> AsyncIterator[RecordStoreClient]:
    """Yield a record store client and close it when the request ends."""

    client = get_record_store_client()
    try:
        yield client
    finally:
        await client.aclose()


async def get_price_feed() -> AsyncIterator[PriceFeedClient]:
    client = get_price_feed_client()
    try:
        yield client
    finally:
        await client.aclose()


__all__ = ["get_app_settings", "get_price_feed", "get_store"]
