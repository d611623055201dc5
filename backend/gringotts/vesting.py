"""Liquid/unvested classification and the projection vesting offset."""
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Tuple

from .models import Holding


def quarter_index(d: date) -> int:
    """Zero-based calendar quarter of ``d``."""

    return (d.month - 1) // 3


def is_liquid(holding: Holding, as_of: date) -> bool:
    if holding.vest_date is None:
        return True
    return holding.vest_date <= as_of


def vesting_offset(holding: Holding, as_of: date) -> Optional[int]:
    """Number of quarters from ``as_of`` until the holding vests.

    ``None`` means the holding is already liquid and always counts as such.
    ``0`` means it vests within the current quarter.
    """

    vest = holding.vest_date
    if vest is None or vest <= as_of:
        return None
    return (vest.year - as_of.year) * 4 + (quarter_index(vest) - quarter_index(as_of))


def is_vested_by(offset: Optional[int], period: int) -> bool:
    if offset is None:
        return True
    return offset <= period


def partition(holdings: Iterable[Holding], as_of: date) -> Tuple[List[Holding], List[Holding]]:
    """Split holdings into ``(liquid, unvested)`` lists preserving order."""

    liquid: List[Holding] = []
    unvested: List[Holding] = []
    for holding in holdings:
        (liquid if is_liquid(holding, as_of) else unvested).append(holding)
    return liquid, unvested
