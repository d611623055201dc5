"""Pydantic schemas for dashboard requests and responses."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from gringotts import Allocation, AssetClass, Dashboard, Holding


class HoldingInput(BaseModel):
    id: str
    name: str
    quantity: float = Field(..., ge=0)
    purchase_price: float = Field(..., ge=0)
    currency: str = Field(default="EUR", min_length=3, max_length=3)
    asset_class: AssetClass = AssetClass.OTHER
    ticker: str | None = None
    purchase_date: date | None = None
    current_price: float | None = Field(default=None, ge=0)
    vest_date: date | None = None
    growth_rate: float | None = None

    def to_domain(self) -> Holding:
        return Holding(**self.model_dump())


class AllocationInput(BaseModel):
    holding_id: str
    dimension: str
    category: str | None = None
    percentage: float = Field(..., ge=0, le=100)

    def to_domain(self) -> Allocation:
        return Allocation(**self.model_dump())


class DashboardRequest(BaseModel):
    holdings: list[HoldingInput] = Field(default_factory=list)
    allocations: list[AllocationInput] = Field(default_factory=list)
    fx_rates: dict[str, float] = Field(default_factory=dict, description="Overrides on top of configured rates.")
    growth_overrides: dict[str, float] = Field(default_factory=dict)
    default_growth_rate: float | None = None
    include_unvested: bool | None = None
    horizon: int | None = Field(default=None, ge=0)
    as_of: date | None = None


class PortfolioStatsSchema(BaseModel):
    total_value: float
    total_cost: float
    gain_loss: float
    gain_loss_pct: float
    liquid_value: float
    unvested_value: float


class HoldingRowSchema(BaseModel):
    id: str
    name: str
    ticker: str | None = None
    asset_class: AssetClass
    quantity: float
    value: float
    cost: float
    gain_loss: float
    percent_return: float
    percent_of_portfolio: float
    liquid: bool
    growth_rate: float


class AllocationSliceSchema(BaseModel):
    category: str
    percent: float
    unclassified: bool = False


class HistoryPointSchema(BaseModel):
    label: str
    month: date
    value: float


class ProjectionYearSchema(BaseModel):
    year: int
    quarters: list[float | None]
    year_end: float | None = None
    yoy_change_pct: float | None = None
    is_baseline: bool = False


class ProjectionSchema(BaseModel):
    labels: list[str]
    liquid: list[float]
    total: list[float]
    include_unvested: bool
    yearly: list[ProjectionYearSchema]


class LabelValueSchema(BaseModel):
    label: str
    value: float


class DashboardResponse(BaseModel):
    reporting_currency: str
    as_of: date
    stats: PortfolioStatsSchema
    holdings: list[HoldingRowSchema]
    allocations: dict[str, list[AllocationSliceSchema]]
    history: list[HistoryPointSchema]
    projection: ProjectionSchema
    asset_classes: list[LabelValueSchema]
    gain_loss: list[LabelValueSchema]
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_dashboard(cls, dashboard: Dashboard, *, reporting_currency: str, as_of: date) -> "DashboardResponse":
        stats = dashboard.stats
        projection = dashboard.projection
        return cls(
            reporting_currency=reporting_currency,
            as_of=as_of,
            stats=PortfolioStatsSchema(
                total_value=stats.total_value,
                total_cost=stats.total_cost,
                gain_loss=stats.gain_loss,
                gain_loss_pct=stats.gain_loss_pct,
                liquid_value=stats.liquid_value,
                unvested_value=stats.unvested_value,
            ),
            holdings=[HoldingRowSchema(**row.__dict__) for row in dashboard.rows],
            allocations={
                dimension: [
                    AllocationSliceSchema(category=s.label, percent=s.percent, unclassified=s.unclassified)
                    for s in slices
                ]
                for dimension, slices in dashboard.allocations.items()
            },
            history=[HistoryPointSchema(label=p.label, month=p.month, value=p.value) for p in dashboard.history],
            projection=ProjectionSchema(
                labels=projection.labels,
                liquid=projection.liquid,
                total=projection.total,
                include_unvested=projection.include_unvested,
                yearly=[
                    ProjectionYearSchema(
                        year=row.year,
                        quarters=list(row.quarters),
                        year_end=row.year_end,
                        yoy_change_pct=None if row.is_baseline else row.year_over_year,
                        is_baseline=row.is_baseline,
                    )
                    for row in projection.yearly
                ],
            ),
            asset_classes=[LabelValueSchema(label=k, value=v) for k, v in dashboard.asset_classes.items()],
            gain_loss=[LabelValueSchema(label=k, value=v) for k, v in dashboard.gain_loss_ranking],
            warnings=list(dashboard.warnings),
        )


class PriceRefreshDetail(BaseModel):
    ticker: str
    status: str
    reason: str | None = None
    old_price: float | None = None
    new_price: float | None = None


class PriceRefreshResponse(BaseModel):
    updated: int = 0
    failed: int = 0
    skipped: int = 0
    total: int = 0
    details: list[PriceRefreshDetail] = Field(default_factory=list)


__all__ = [
    "AllocationInput",
    "DashboardRequest",
    "DashboardResponse",
    "HoldingInput",
    "PriceRefreshDetail",
    "PriceRefreshResponse",
]
