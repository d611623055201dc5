"""Pydantic schema exports."""

from .dashboard import (
    AllocationInput,
    DashboardRequest,
    DashboardResponse,
    HoldingInput,
    PriceRefreshDetail,
    PriceRefreshResponse,
)
from .records import AllocationRecord, HoldingRecord, parse_allocations, parse_holdings

__all__ = [
    "AllocationInput",
    "AllocationRecord",
    "DashboardRequest",
    "DashboardResponse",
    "HoldingInput",
    "HoldingRecord",
    "PriceRefreshDetail",
    "PriceRefreshResponse",
    "parse_allocations",
    "parse_holdings",
]
