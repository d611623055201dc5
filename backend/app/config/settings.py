"""Application configuration and environment helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings

from gringotts import ProjectionParameters, RateTable

DEFAULT_TIMEZONE = "Europe/Madrid"
DEFAULT_REPORTING_CURRENCY = "EUR"


def _default_fx_rates() -> dict[str, float]:
    # Reporting-currency value of one unit of each code.
    return {"USD": 0.92, "MXN": 0.054, "GBP": 1.17}


class AppSettings(BaseSettings):
    """Configuration options for the Gringotts dashboard service."""

    app_name: str = Field(default="Gringotts Portfolio Dashboard")
    timezone: str = Field(default=DEFAULT_TIMEZONE)
    log_level: str = Field(default="INFO")

    reporting_currency: str = Field(default=DEFAULT_REPORTING_CURRENCY)
    fx_rates: dict[str, float] = Field(default_factory=_default_fx_rates)

    default_growth_rate: float = Field(default=7.0, description="Annual growth rate in percent.")
    projection_horizon: int = Field(default=20, ge=0, description="Forecast horizon in quarters.")
    include_unvested: bool = Field(default=True)
    allocation_noise_threshold: float = Field(default=0.1, ge=0.0)
    allocation_dimensions: list[str] = Field(default_factory=lambda: ["industry", "geography"])

    notion_api_url: str = Field(default="https://api.notion.com/v1")
    notion_token: str | None = Field(default=None)
    notion_version: str = Field(default="2022-06-28")
    investments_database_id: str = Field(default="")
    allocations_database_id: str = Field(default="")
    store_timeout_seconds: float = Field(default=30.0)
    store_max_retries: int = Field(default=3, ge=0)
    store_retry_base_delay_seconds: float = Field(default=1.0, ge=0.0)

    price_chart_url: str = Field(default="https://query1.finance.yahoo.com/v8/finance/chart/")
    price_fetch_delay_seconds: float = Field(default=0.4, ge=0.0)
    price_fetch_timeout_seconds: float = Field(default=10.0)

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="gringotts")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def rate_table(self, overrides: dict[str, float] | None = None) -> RateTable:
        rates = dict(self.fx_rates)
        rates.update(overrides or {})
        return RateTable(rates=rates, reporting_currency=self.reporting_currency)

    def projection_parameters(self, **overrides: Any) -> ProjectionParameters:
        values: dict[str, Any] = {
            "default_growth_rate": self.default_growth_rate,
            "include_unvested": self.include_unvested,
            "horizon": self.projection_horizon,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ProjectionParameters(**values)

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""

        hidden = {"notion_token"}
        return {k: ("***" if k in hidden else v) for k, v in self.model_dump().items()}


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_TIMEZONE",
    "DEFAULT_REPORTING_CURRENCY",
    "get_settings",
]
