"""Core package for the Gringotts portfolio valuation and projection engine."""

from .dashboard import Dashboard, HoldingRow, PortfolioStats, build_dashboard
from .fx import Conversion, RateTable
from .models import (
    BASELINE,
    UNCLASSIFIED,
    Allocation,
    AssetClass,
    Holding,
    PortfolioSnapshot,
    ProjectionParameters,
    Sentinel,
)
from .projection import ProjectionResult, project

__all__ = [
    "Allocation",
    "AssetClass",
    "BASELINE",
    "Conversion",
    "Dashboard",
    "Holding",
    "HoldingRow",
    "PortfolioSnapshot",
    "PortfolioStats",
    "ProjectionParameters",
    "ProjectionResult",
    "RateTable",
    "Sentinel",
    "UNCLASSIFIED",
    "build_dashboard",
    "project",
]
