"""Out-of-band price refresh for holdings that carry a ticker."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Awaitable, Callable

from app.providers.price_feed import PriceFeedClient
from app.providers.record_store import RecordStoreClient, RecordStoreError
from app.schemas import PriceRefreshDetail, PriceRefreshResponse

logger = logging.getLogger(__name__)


async def refresh_prices(
    store: RecordStoreClient,
    feed: PriceFeedClient,
    *,
    today: date | None = None,
    delay_seconds: float = 0.4,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> PriceRefreshResponse:
    """Fetch a fresh price for every ticker and write it back to the store.

    Holdings already refreshed ``today`` are skipped, so at most one update
    per holding per day reaches the store.
    """

    today = today or date.today()
    holdings = await store.query_priced_holdings()
    result = PriceRefreshResponse(total=len(holdings))

    for holding in holdings:
        if not holding.ticker:
            result.skipped += 1
            continue
        if holding.last_price_update == today:
            result.skipped += 1
            result.details.append(
                PriceRefreshDetail(ticker=holding.ticker, status="skipped", reason="Already updated today")
            )
            continue

        quote = await feed.fetch_price(holding.ticker)
        if quote is not None and quote.price > 0:
            try:
                await store.update_price(holding.id, quote.price, today)
            except RecordStoreError as exc:
                logger.warning("Price update for %s failed: %s", holding.ticker, exc)
                result.failed += 1
                result.details.append(
                    PriceRefreshDetail(ticker=holding.ticker, status="failed", reason=f"Store update failed: {exc}")
                )
            else:
                result.updated += 1
                result.details.append(
                    PriceRefreshDetail(
                        ticker=holding.ticker,
                        status="updated",
                        old_price=holding.current_price,
                        new_price=quote.price,
                    )
                )
        else:
            result.failed += 1
            result.details.append(
                PriceRefreshDetail(ticker=holding.ticker, status="failed", reason="Price not available from feed")
            )

        await sleep(delay_seconds)

    logger.info(
        "Price refresh finished: %s updated, %s failed, %s skipped",
        result.updated,
        result.failed,
        result.skipped,
    )
    return result


__all__ = ["refresh_prices"]
