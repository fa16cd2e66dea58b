"""Precondition checks shared by the calculators and path simulators.

Each helper answers "can this scenario be computed?" and returns ``None``
when it cannot, so callers can hand the sentinel straight back.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Optional

from backend.core.noise import round_half_up
from backend.schemas.scenarios import PriceModel


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def all_finite(*values: Any) -> bool:
    return all(is_finite_number(value) for value in values)


def coerce_price_model(value: Any) -> Optional[PriceModel]:
    try:
        return PriceModel(value)
    except ValueError:
        return None


def dca_periods(
    initial_amount: float,
    periodic_amount: float,
    reference_price: float,
    target_price: float,
    horizon_periods: float,
) -> Optional[int]:
    """Whole months to simulate, or None when the DCA inputs are unusable."""
    if not all_finite(initial_amount, periodic_amount, reference_price, target_price, horizon_periods):
        return None
    if reference_price <= 0 or horizon_periods <= 0:
        return None
    if initial_amount < 0 or periodic_amount < 0 or target_price < 0:
        return None
    periods = round_half_up(horizon_periods)
    return periods if periods > 0 else None


def compound_months(
    initial_amount: float,
    periodic_amount: float,
    annual_rate: float,
    years: float,
) -> Optional[int]:
    """Month count for a compound projection, or None when inputs are unusable."""
    if not all_finite(initial_amount, periodic_amount, annual_rate, years):
        return None
    if years <= 0 or annual_rate < -1:
        return None
    if initial_amount < 0 or periodic_amount < 0:
        return None
    return round_half_up(years * 12)


def monthly_rate(annual_rate: float) -> float:
    """Monthly rate whose twelve compoundings reproduce ``annual_rate`` exactly."""
    return (1.0 + annual_rate) ** (1.0 / 12.0) - 1.0
