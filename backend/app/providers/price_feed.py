"""Chart-endpoint price feed used to refresh holding prices."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from app.config import get_settings

logger = logging.getLogger(__name__)

USER_AGENT = "Gringotts/1.0"


@dataclass(frozen=True)
class Quote:
    price: float
    currency: str | None = None


def _quote_meta(payload: Any) -> dict[str, Any] | None:
    """Return ``chart.result[0].meta`` when the payload has that shape."""

    chart = payload.get("chart") if isinstance(payload, dict) else None
    results = chart.get("result") if isinstance(chart, dict) else None
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        return None
    meta = results[0].get("meta")
    return meta if isinstance(meta, dict) else None


class PriceFeedClient:
    """Fetch the latest market price for a ticker.

    Every failure mode (HTTP error, network error, missing field) is reported
    as ``None`` so one bad ticker never aborts a refresh run.
    """

    def __init__(
        self,
        chart_url: str = "https://query1.finance.yahoo.com/v8/finance/chart/",
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.chart_url = chart_url if chart_url.endswith("/") else f"{chart_url}/"
        self._client = client or httpx.AsyncClient(timeout=timeout, headers={"User-Agent": USER_AGENT})

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_price(self, ticker: str) -> Quote | None:
        url = f"{self.chart_url}{quote(ticker, safe='')}"
        try:
            response = await self._client.get(url, params={"interval": "1d", "range": "1d"})
        except httpx.HTTPError as exc:
            logger.warning("Failed to fetch price for %s: %s", ticker, exc)
            return None
        if response.status_code >= 400:
            logger.warning("Price feed returned %s for %s", response.status_code, ticker)
            return None
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Price feed returned invalid JSON for %s", ticker)
            return None

        meta = _quote_meta(payload)
        if meta is None:
            logger.warning("Price feed returned no quote for %s", ticker)
            return None
        price = meta.get("regularMarketPrice")
        if not isinstance(price, (int, float)) or price <= 0:
            return None
        return Quote(price=float(price), currency=meta.get("currency"))


def get_price_feed_client() -> PriceFeedClient:
    settings = get_settings()
    return PriceFeedClient(settings.price_chart_url, timeout=settings.price_fetch_timeout_seconds)


__all__ = ["PriceFeedClient", "Quote", "get_price_feed_client"]
