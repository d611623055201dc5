"""Record-store page parsing into engine domain models.

Pages follow the Notion database layout: every column is a typed property
(``title``, ``rich_text``, ``number``, ``select``, ``date`` or ``relation``).
Validation happens here so the engine only ever sees well-formed input.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from gringotts import Allocation, AssetClass, Holding

logger = logging.getLogger(__name__)

Page = Mapping[str, Any]


def get_title(prop: Mapping[str, Any] | None) -> str:
    items = (prop or {}).get("title") or []
    return items[0].get("text", {}).get("content", "") if items else ""


def get_rich_text(prop: Mapping[str, Any] | None) -> str:
    items = (prop or {}).get("rich_text") or []
    return items[0].get("text", {}).get("content", "") if items else ""


def get_number(prop: Mapping[str, Any] | None) -> float | None:
    return (prop or {}).get("number")


def get_select(prop: Mapping[str, Any] | None) -> str | None:
    selected = (prop or {}).get("select") or {}
    return selected.get("name") or None


def get_date(prop: Mapping[str, Any] | None) -> str | None:
    value = (prop or {}).get("date") or {}
    start = value.get("start")
    # Date-time values carry a time component the engine does not use
    return start[:10] if start else None


def get_relation_ids(prop: Mapping[str, Any] | None) -> list[str]:
    return [item["id"] for item in (prop or {}).get("relation") or [] if item.get("id")]


class HoldingRecord(BaseModel):
    id: str
    name: str = Field(..., min_length=1)
    ticker: str | None = None
    quantity: float = Field(..., ge=0)
    purchase_price: float = Field(..., ge=0)
    purchase_date: date | None = None
    current_price: float | None = Field(default=None, ge=0)
    currency: str = Field(default="EUR", min_length=3, max_length=3)
    asset_type: str | None = None
    vest_date: date | None = None
    annual_growth_rate: float | None = None
    last_price_update: date | None = None
    notes: str | None = None

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_page(cls, page: Page) -> "HoldingRecord":
        props = page.get("properties", {})
        return cls(
            id=page["id"],
            name=get_title(props.get("name")),
            ticker=get_rich_text(props.get("ticker")) or None,
            quantity=get_number(props.get("quantity")),
            purchase_price=get_number(props.get("purchase_price")),
            purchase_date=get_date(props.get("purchase_date")),
            current_price=get_number(props.get("current_price")),
            currency=get_select(props.get("currency")) or "EUR",
            asset_type=get_select(props.get("asset_type")),
            vest_date=get_date(props.get("vest_date")),
            annual_growth_rate=get_number(props.get("annual_growth_rate")),
            last_price_update=get_date(props.get("last_price_update")),
            notes=get_rich_text(props.get("notes")) or None,
        )

    def to_domain(self) -> Holding:
        return Holding(
            id=self.id,
            name=self.name,
            ticker=self.ticker,
            quantity=self.quantity,
            purchase_price=self.purchase_price,
            purchase_date=self.purchase_date,
            current_price=self.current_price,
            currency=self.currency,
            asset_class=AssetClass.parse(self.asset_type),
            vest_date=self.vest_date,
            growth_rate=self.annual_growth_rate,
            last_price_update=self.last_price_update,
            notes=self.notes,
        )


class AllocationRecord(BaseModel):
    id: str
    holding_ids: list[str] = Field(..., min_length=1)
    allocation_type: str = Field(..., min_length=1)
    category: str | None = None
    percentage: float = Field(..., ge=0, le=100)

    @classmethod
    def from_page(cls, page: Page) -> "AllocationRecord":
        props = page.get("properties", {})
        return cls(
            id=page["id"],
            holding_ids=get_relation_ids(props.get("investments")),
            allocation_type=get_select(props.get("allocation_type")) or "",
            category=get_select(props.get("category")),
            percentage=get_number(props.get("percentage")),
        )

    def to_domain(self) -> list[Allocation]:
        return [
            Allocation(
                holding_id=holding_id,
                dimension=self.allocation_type,
                category=self.category,
                percentage=self.percentage,
            )
            for holding_id in self.holding_ids
        ]


def parse_holdings(pages: Iterable[Page]) -> list[Holding]:
    """Parse holding pages, skipping and logging malformed ones."""

    holdings: list[Holding] = []
    for page in pages:
        try:
            holdings.append(HoldingRecord.from_page(page).to_domain())
        except (ValidationError, KeyError) as exc:
            logger.warning("Skipping malformed holding record %s: %s", page.get("id"), exc)
    return holdings


def parse_allocations(pages: Iterable[Page]) -> list[Allocation]:
    allocations: list[Allocation] = []
    for page in pages:
        try:
            allocations.extend(AllocationRecord.from_page(page).to_domain())
        except (ValidationError, KeyError) as exc:
            logger.warning("Skipping malformed allocation record %s: %s", page.get("id"), exc)
    return allocations


__all__ = [
    "AllocationRecord",
    "HoldingRecord",
    "parse_allocations",
    "parse_holdings",
]
