"""Downsampling of simulated paths to a fixed chart point budget."""

from __future__ import annotations

from bisect import bisect_left
from typing import List, Sequence

from backend.core.noise import round_half_up
from backend.schemas.scenarios import TimeSeriesPoint

DCA_CHART_POINTS = 37
COMPOUND_CHART_POINTS = 49
MIN_CHART_POINTS = 2


def _nearest_index(periods: Sequence[int], target: int) -> int:
    idx = bisect_left(periods, target)
    if idx == 0:
        return 0
    if idx >= len(periods):
        return len(periods) - 1
    before, after = periods[idx - 1], periods[idx]
    return idx if after - target < target - before else idx - 1


def sample(series: Sequence[TimeSeriesPoint], max_points: int = DCA_CHART_POINTS) -> List[TimeSeriesPoint]:
    """
    Pick at most ``max_points`` points spread evenly over the period range.

    The first and last points of ``series`` are always part of the result,
    as the very same objects, so chart endpoints match the summary numbers.
    Series that already fit the budget come back unchanged. A budget below
    two is raised to two, since both endpoints are always kept.
    """
    max_points = max(int(max_points), MIN_CHART_POINTS)
    if len(series) <= max_points:
        return list(series)

    periods = [point.period for point in series]
    first_period = periods[0]
    last_period = periods[-1]
    step = (last_period - first_period) / (max_points - 1)

    sampled: List[TimeSeriesPoint] = []
    last_index = -1
    for i in range(max_points):
        target = min(max(round_half_up(first_period + i * step), first_period), last_period)
        index = _nearest_index(periods, target)
        if index == last_index:
            continue
        sampled.append(series[index])
        last_index = index

    return sampled


__all__ = ["DCA_CHART_POINTS", "COMPOUND_CHART_POINTS", "MIN_CHART_POINTS", "sample"]
