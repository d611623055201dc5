"""Client for the external document database holding investments and allocations."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Awaitable, Callable, TypeVar

import httpx
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt, wait_exponential

from app.config import get_settings
from app.schemas.records import parse_allocations, parse_holdings
from gringotts import Allocation, Holding

logger = logging.getLogger(__name__)

PAGE_SIZE = 100

T = TypeVar("T")
Sleep = Callable[[float], Awaitable[Any]]


class RecordStoreError(RuntimeError):
    """Raised when the record store rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        return self.status_code is None or not 400 <= self.status_code < 500


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, RecordStoreError) and exc.retryable


def _log_retry(retry_state: RetryCallState) -> None:
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning("Record store retry %s after %.1fs: %s", retry_state.attempt_number, delay, error)


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 3,
    base_delay: float = 1.0,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Run ``fn`` with exponential backoff; client errors are raised at once."""

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=base_delay),
        retry=retry_if_exception(_is_retryable),
        before_sleep=_log_retry,
        sleep=sleep,
        reraise=True,
    )
    return await retrying(fn)


class RecordStoreClient:
    """Query and update holdings and allocations in a Notion-style database."""

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
        investments_database_id: str = "",
        allocations_database_id: str = "",
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.investments_database_id = investments_database_id
        self.allocations_database_id = allocations_database_id
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay
        self._sleep = sleep
        headers = {"Notion-Version": notion_version, "Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = client or httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, method: str, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TransportError as exc:
            raise RecordStoreError(f"Record store unreachable: {exc}") from exc
        if response.status_code >= 400:
            try:
                detail = response.json().get("message", response.text)
            except ValueError:
                detail = response.text
            raise RecordStoreError(
                f"Record store error {response.status_code}: {detail}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise RecordStoreError(
                f"Record store returned invalid JSON for {method} {path}",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise RecordStoreError(
                f"Record store returned an unexpected payload for {method} {path}",
                status_code=response.status_code,
            )
        return payload

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        return await with_retry(
            lambda: self._send(method, path, json),
            max_retries=self._max_retries,
            base_delay=self._retry_base_delay,
            sleep=self._sleep,
        )

    async def query_database(
        self,
        database_id: str,
        *,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """Return every page of ``database_id``, following pagination cursors."""

        pages: list[dict[str, Any]] = []
        cursor: str | None = None
        while True:
            body: dict[str, Any] = {"page_size": PAGE_SIZE}
            if cursor:
                body["start_cursor"] = cursor
            if filter:
                body["filter"] = filter
            if sorts:
                body["sorts"] = sorts
            payload = await self._request("POST", f"/databases/{database_id}/query", json=body)
            pages.extend(payload.get("results", []))
            cursor = payload.get("next_cursor")
            if not payload.get("has_more") or not cursor:
                return pages

    async def query_holdings(self) -> list[Holding]:
        pages = await self.query_database(
            self.investments_database_id,
            sorts=[{"property": "name", "direction": "ascending"}],
        )
        return parse_holdings(pages)

    async def query_priced_holdings(self) -> list[Holding]:
        """Holdings that carry a ticker and can therefore be re-priced."""

        pages = await self.query_database(
            self.investments_database_id,
            filter={"property": "ticker", "rich_text": {"is_not_empty": True}},
        )
        return parse_holdings(pages)

    async def query_allocations(self) -> list[Allocation]:
        pages = await self.query_database(
            self.allocations_database_id,
            sorts=[{"property": "allocation_type", "direction": "ascending"}],
        )
        return parse_allocations(pages)

    async def update_price(self, page_id: str, price: float, on: date) -> dict[str, Any]:
        properties = {
            "current_price": {"number": price},
            "last_price_update": {"date": {"start": on.isoformat()}},
        }
        return await self._request("PATCH", f"/pages/{page_id}", json={"properties": properties})


def get_record_store_client() -> RecordStoreClient:
    settings = get_settings()
    return RecordStoreClient(
        settings.notion_token,
        base_url=settings.notion_api_url,
        notion_version=settings.notion_version,
        investments_database_id=settings.investments_database_id,
        allocations_database_id=settings.allocations_database_id,
        timeout=settings.store_timeout_seconds,
        max_retries=settings.store_max_retries,
        retry_base_delay=settings.store_retry_base_delay_seconds,
    )


__all__ = [
    "RecordStoreClient",
    "RecordStoreError",
    "get_record_store_client",
    "with_retry",
]
