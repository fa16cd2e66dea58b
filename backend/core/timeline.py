"""Continuous-time readings over a sampled chart series (scrubbing)."""

from __future__ import annotations

from bisect import bisect_right
from typing import Optional, Sequence, Union

from backend.core.inputs import is_finite_number
from backend.schemas.scenarios import ScrubPoint, TimeSeriesPoint

TimelineValue = Union[TimeSeriesPoint, ScrubPoint]


def value_at(sampled: Sequence[TimeSeriesPoint], target_period: float) -> Optional[TimelineValue]:
    """
    Linearly interpolate portfolio value and contributions at ``target_period``.

    Targets at or outside the ends, and targets landing exactly on a sampled
    period, return the stored point itself. Nothing is simulated here; the
    bracket is found by bisection. An empty series or a non-finite target
    gives None.
    """
    if not sampled or not is_finite_number(target_period):
        return None

    first, last = sampled[0], sampled[-1]
    if target_period <= first.period:
        return first
    if target_period >= last.period:
        return last

    periods = [point.period for point in sampled]
    upper = bisect_right(periods, target_period)
    lower_point = sampled[upper - 1]
    if lower_point.period == target_period:
        return lower_point
    upper_point = sampled[upper]

    width = upper_point.period - lower_point.period
    t = (target_period - lower_point.period) / width if width > 0 else 0.0
    return ScrubPoint(
        period=target_period,
        portfolio_value=lower_point.portfolio_value
        + (upper_point.portfolio_value - lower_point.portfolio_value) * t,
        amount_contributed=lower_point.amount_contributed
        + (upper_point.amount_contributed - lower_point.amount_contributed) * t,
    )


def value_at_fraction(sampled: Sequence[TimeSeriesPoint], fraction: float) -> Optional[TimelineValue]:
    """Map a horizontal pointer position (0..1 across the chart) to a reading."""
    if not sampled or not is_finite_number(fraction):
        return None
    clamped = max(0.0, min(1.0, fraction))
    return value_at(sampled, clamped * sampled[-1].period)


__all__ = ["TimelineValue", "value_at", "value_at_fraction"]
