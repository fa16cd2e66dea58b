"""
Month-by-month path simulators behind the scenario charts.

Each simulator is a fold over the month range: a step function takes the
previous snapshot and the month index and returns the next snapshot, and
``itertools.accumulate`` keeps every intermediate one. Randomness, when
needed, comes from a noise stream created per call and handed to the step
function explicitly.
"""

from __future__ import annotations

from functools import partial
from itertools import accumulate
from typing import Any, List, NamedTuple, Optional

from backend.core.inputs import coerce_price_model, compound_months, dca_periods, monthly_rate
from backend.core.noise import NoiseStream, gaussian, hash_inputs, make_stream
from backend.core.sampling import COMPOUND_CHART_POINTS, DCA_CHART_POINTS, sample
from backend.schemas.scenarios import PriceModel, TimeSeriesPoint

MONTHLY_VOLATILITY = 0.15
PRICE_FLOOR_RATIO = 0.01


class DcaPlan(NamedTuple):
    initial_amount: float
    periodic_amount: float
    reference_price: float
    target_price: float
    periods: int
    volatility: float
    price_floor_ratio: float

    def trend_price(self, period: int) -> float:
        """Straight line from reference price (month 0) to target price (last month)."""
        if period >= self.periods:
            return self.target_price
        return self.reference_price + (self.target_price - self.reference_price) * (period / self.periods)

    def contributed(self, period: int) -> float:
        return self.initial_amount + self.periodic_amount * period


class DcaSnapshot(NamedTuple):
    units: float
    point: TimeSeriesPoint


def _dca_step(
    previous: DcaSnapshot,
    period: int,
    *,
    plan: DcaPlan,
    stream: Optional[NoiseStream],
) -> DcaSnapshot:
    price = plan.trend_price(period)
    if stream is not None:
        price *= 1.0 + plan.volatility * gaussian(stream)
        price = max(price, plan.reference_price * plan.price_floor_ratio)

    units = previous.units
    if price > 0:
        units += plan.periodic_amount / price

    # horizon month is valued at the target price
    mark = plan.target_price if period == plan.periods else price
    return DcaSnapshot(
        units=units,
        point=TimeSeriesPoint(
            period=period,
            portfolio_value=units * mark,
            amount_contributed=plan.contributed(period),
        ),
    )


def _best_case_snapshot(plan: DcaPlan, period: int) -> DcaSnapshot:
    units = plan.contributed(period) / plan.reference_price
    return DcaSnapshot(
        units=units,
        point=TimeSeriesPoint(
            period=period,
            portfolio_value=units * plan.trend_price(period),
            amount_contributed=plan.contributed(period),
        ),
    )


def dca_snapshots(
    initial_amount: float,
    periodic_amount: float,
    reference_price: float,
    target_price: float,
    horizon_periods: float,
    price_model: Any = PriceModel.BEST_CASE,
    *,
    volatility: float = MONTHLY_VOLATILITY,
    price_floor_ratio: float = PRICE_FLOOR_RATIO,
) -> List[DcaSnapshot]:
    """Units held and portfolio point for every month 0..horizon."""
    model = coerce_price_model(price_model)
    periods = dca_periods(initial_amount, periodic_amount, reference_price, target_price, horizon_periods)
    if model is None or periods is None:
        return []

    plan = DcaPlan(
        initial_amount=float(initial_amount),
        periodic_amount=float(periodic_amount),
        reference_price=float(reference_price),
        target_price=float(target_price),
        periods=periods,
        volatility=volatility,
        price_floor_ratio=price_floor_ratio,
    )

    if model == PriceModel.BEST_CASE:
        # every unit is bought at today's price, so only the valuation moves
        return [_best_case_snapshot(plan, period) for period in range(periods + 1)]

    stream = None
    if model == PriceModel.VOLATILE:
        stream = make_stream(
            hash_inputs(initial_amount, periodic_amount, reference_price, target_price, horizon_periods)
        )

    start_units = plan.initial_amount / plan.reference_price
    start = DcaSnapshot(
        units=start_units,
        point=TimeSeriesPoint(
            period=0,
            portfolio_value=start_units * plan.reference_price,
            amount_contributed=plan.initial_amount,
        ),
    )
    step = partial(_dca_step, plan=plan, stream=stream)
    return list(accumulate(range(1, periods + 1), step, initial=start))


def simulate_dca_path(
    initial_amount: float,
    periodic_amount: float,
    reference_price: float,
    target_price: float,
    horizon_periods: float,
    price_model: Any = PriceModel.BEST_CASE,
    *,
    volatility: float = MONTHLY_VOLATILITY,
    price_floor_ratio: float = PRICE_FLOOR_RATIO,
) -> List[TimeSeriesPoint]:
    snapshots = dca_snapshots(
        initial_amount,
        periodic_amount,
        reference_price,
        target_price,
        horizon_periods,
        price_model,
        volatility=volatility,
        price_floor_ratio=price_floor_ratio,
    )
    return [snapshot.point for snapshot in snapshots]


def _compound_step(
    previous: TimeSeriesPoint,
    period: int,
    *,
    rate: float,
    initial_amount: float,
    periodic_amount: float,
) -> TimeSeriesPoint:
    return TimeSeriesPoint(
        period=period,
        portfolio_value=previous.portfolio_value * (1.0 + rate) + periodic_amount,
        amount_contributed=initial_amount + periodic_amount * period,
    )


def simulate_compound_path(
    initial_amount: float,
    periodic_amount: float,
    annual_rate: float,
    years: float,
) -> List[TimeSeriesPoint]:
    """
    Balance after every month of compound growth.

    Contributions land at the end of each month, after that month's growth.
    """
    months = compound_months(initial_amount, periodic_amount, annual_rate, years)
    if months is None:
        return []

    start = TimeSeriesPoint(
        period=0,
        portfolio_value=float(initial_amount),
        amount_contributed=float(initial_amount),
    )
    step = partial(
        _compound_step,
        rate=monthly_rate(annual_rate),
        initial_amount=float(initial_amount),
        periodic_amount=float(periodic_amount),
    )
    return list(accumulate(range(1, months + 1), step, initial=start))


def build_dca_chart(
    initial_amount: float,
    periodic_amount: float,
    reference_price: float,
    target_price: float,
    horizon_periods: float,
    price_model: Any = PriceModel.BEST_CASE,
    *,
    max_points: int = DCA_CHART_POINTS,
    volatility: float = MONTHLY_VOLATILITY,
    price_floor_ratio: float = PRICE_FLOOR_RATIO,
) -> List[TimeSeriesPoint]:
    path = simulate_dca_path(
        initial_amount,
        periodic_amount,
        reference_price,
        target_price,
        horizon_periods,
        price_model,
        volatility=volatility,
        price_floor_ratio=price_floor_ratio,
    )
    return sample(path, max_points)


def build_compound_chart(
    initial_amount: float,
    periodic_amount: float,
    annual_rate: float,
    years: float,
    *,
    max_points: int = COMPOUND_CHART_POINTS,
) -> List[TimeSeriesPoint]:
    return sample(simulate_compound_path(initial_amount, periodic_amount, annual_rate, years), max_points)


__all__ = [
    "MONTHLY_VOLATILITY",
    "PRICE_FLOOR_RATIO",
    "DcaPlan",
    "DcaSnapshot",
    "dca_snapshots",
    "simulate_dca_path",
    "simulate_compound_path",
    "build_dca_chart",
    "build_compound_chart",
]
