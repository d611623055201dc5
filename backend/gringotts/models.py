"""Domain models used by the Gringotts portfolio engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Mapping, Optional, Tuple

from .fx import RateTable

DEFAULT_GROWTH_RATE = 7.0
DEFAULT_HORIZON = 20


class AssetClass(str, Enum):
    STOCK = "stock"
    ETF = "etf"
    MUTUAL_FUND = "mutual_fund"
    FUND = "fund"
    BOND = "bond"
    CRYPTO = "crypto"
    PRIVATE_EQUITY = "private_equity"
    REAL_ESTATE = "real_estate"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: str | None) -> "AssetClass":
        """Map a free-form tag onto a known asset class, falling back to ``OTHER``."""

        if not raw:
            return cls.OTHER
        try:
            return cls(raw.strip().lower().replace(" ", "_"))
        except ValueError:
            return cls.OTHER


class Sentinel(Enum):
    """Markers that must never be confused with real labels or numbers."""

    UNCLASSIFIED = "Unclassified"
    BASELINE = "baseline"

    def __str__(self) -> str:
        return self.value


UNCLASSIFIED = Sentinel.UNCLASSIFIED
BASELINE = Sentinel.BASELINE


@dataclass(frozen=True)
class Holding:
    """One owned asset as read from the record store."""

    id: str
    name: str
    quantity: float
    purchase_price: float
    currency: str = "EUR"
    asset_class: AssetClass = AssetClass.OTHER
    ticker: Optional[str] = None
    purchase_date: Optional[date] = None
    current_price: Optional[float] = None
    vest_date: Optional[date] = None
    growth_rate: Optional[float] = None
    last_price_update: Optional[date] = None
    notes: Optional[str] = None

    @property
    def label(self) -> str:
        return self.ticker or self.name


@dataclass(frozen=True)
class Allocation:
    """A fractional categorisation of one holding along one dimension."""

    holding_id: str
    dimension: str
    percentage: float
    category: Optional[str] = None


@dataclass(frozen=True)
class ProjectionParameters:
    default_growth_rate: float = DEFAULT_GROWTH_RATE
    growth_overrides: Mapping[str, float] = field(default_factory=dict)
    include_unvested: bool = True
    horizon: int = DEFAULT_HORIZON

    def growth_rate_for(self, holding: Holding) -> float:
        """Return the effective annual growth rate (percent) for ``holding``.

        Slider overrides win over the rate stored on the holding, which in
        turn wins over the global default.
        """

        if holding.id in self.growth_overrides:
            return self.growth_overrides[holding.id]
        if holding.growth_rate is not None:
            return holding.growth_rate
        return self.default_growth_rate


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Immutable input for every engine computation."""

    holdings: Tuple[Holding, ...]
    allocations: Tuple[Allocation, ...] = ()
    rates: RateTable = field(default_factory=RateTable)
    parameters: ProjectionParameters = field(default_factory=ProjectionParameters)
    as_of: date = field(default_factory=date.today)
    noise_threshold: float = 0.1

    def __post_init__(self) -> None:
        object.__setattr__(self, "holdings", tuple(self.holdings))
        object.__setattr__(self, "allocations", tuple(self.allocations))
