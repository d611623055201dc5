"""FX conversion helpers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, NamedTuple

DEFAULT_REPORTING_CURRENCY = "EUR"


class Conversion(NamedTuple):
    """Result of converting an amount into the reporting currency."""

    amount: float
    currency: str
    recognized: bool = True


@dataclass(frozen=True)
class RateTable:
    """Convert amounts into the reporting currency.

    ``rates`` maps a currency code to the reporting-currency value of one
    unit of that currency, so conversion is a plain multiplication.
    """

    rates: Dict[str, float] = field(default_factory=dict)
    reporting_currency: str = DEFAULT_REPORTING_CURRENCY

    def __post_init__(self) -> None:
        normalized = {code.upper(): float(rate) for code, rate in self.rates.items()}
        object.__setattr__(self, "rates", normalized)
        object.__setattr__(self, "reporting_currency", self.reporting_currency.upper())

    def is_recognized(self, currency: str | None) -> bool:
        code = (currency or self.reporting_currency).upper()
        return code == self.reporting_currency or code in self.rates

    def rate(self, currency: str | None) -> float | None:
        """Return the conversion factor for ``currency`` or ``None`` if unknown."""

        code = (currency or self.reporting_currency).upper()
        if code == self.reporting_currency:
            return 1.0
        return self.rates.get(code)

    def to_reporting_currency(self, amount: float, currency: str | None) -> Conversion:
        """Convert ``amount`` from ``currency``.

        Unknown codes leave the amount unchanged and are flagged through
        ``Conversion.recognized`` so callers can warn the user.
        """

        code = (currency or self.reporting_currency).upper()
        factor = self.rate(code)
        if factor is None:
            return Conversion(amount=amount, currency=code, recognized=False)
        return Conversion(amount=amount * factor, currency=code)

    def with_rates(self, **overrides: float) -> "RateTable":
        """Return a copy with some factors replaced."""

        merged = dict(self.rates)
        merged.update({code.upper(): rate for code, rate in overrides.items()})
        return RateTable(rates=merged, reporting_currency=self.reporting_currency)
