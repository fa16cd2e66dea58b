"""Summary calculators for the "what if" scenarios.

All calculators return ``None`` instead of raising when the inputs cannot
produce a meaningful answer (non-positive price or horizon, non-finite
numbers, negative amounts, or a result too large for a float). Callers
treat ``None`` as "show a hint".
"""

from __future__ import annotations

import math
from typing import Any, Optional, TypeVar

from backend.core.inputs import all_finite, coerce_price_model, compound_months, dca_periods
from backend.core.paths import (
    MONTHLY_VOLATILITY,
    PRICE_FLOOR_RATIO,
    dca_snapshots,
    simulate_compound_path,
)
from backend.schemas.scenarios import (
    CompoundResult,
    DcaResult,
    GainResult,
    HistoricalResult,
    PriceModel,
    ScenarioResult,
)


ResultT = TypeVar("ResultT", bound=ScenarioResult)


def _multiplier(final_value: float, total_contributed: float) -> float:
    return final_value / total_contributed if total_contributed > 0 else 0.0


def _finite_or_none(result: ResultT) -> Optional[ResultT]:
    # finite inputs can still overflow to inf/nan
    if all(math.isfinite(value) for value in result.model_dump().values()):
        return result
    return None


def project_dca(
    initial_amount: float,
    periodic_amount: float,
    reference_price: float,
    target_price: float,
    horizon_periods: float,
    price_model: Any = PriceModel.BEST_CASE,
    *,
    volatility: float = MONTHLY_VOLATILITY,
    price_floor_ratio: float = PRICE_FLOOR_RATIO,
) -> Optional[DcaResult]:
    """
    Forward-looking DCA projection valued at ``target_price``.

    bestCase is the deliberately optimistic variant: every contribution,
    including future monthly ones, is assumed bought at ``reference_price``.
    linear and volatile walk the month-by-month path and take its final
    snapshot, so the summary always matches the chart.
    """
    model = coerce_price_model(price_model)
    periods = dca_periods(initial_amount, periodic_amount, reference_price, target_price, horizon_periods)
    if model is None or periods is None:
        return None

    total_contributed = initial_amount + periodic_amount * periods

    if model == PriceModel.BEST_CASE:
        total_units = total_contributed / reference_price
    else:
        snapshots = dca_snapshots(
            initial_amount,
            periodic_amount,
            reference_price,
            target_price,
            horizon_periods,
            model,
            volatility=volatility,
            price_floor_ratio=price_floor_ratio,
        )
        total_units = snapshots[-1].units

    final_value = total_units * target_price
    result = DcaResult(
        total_contributed=total_contributed,
        total_units=total_units,
        final_value=final_value,
        profit=final_value - total_contributed,
        multiplier=_multiplier(final_value, total_contributed),
    )
    return _finite_or_none(result)


def replay_historical(
    invested_amount: float,
    historical_price: float,
    current_price: float,
) -> Optional[HistoricalResult]:
    """What a past lump sum bought at ``historical_price`` is worth today."""
    if not all_finite(invested_amount, historical_price, current_price):
        return None
    if historical_price <= 0 or current_price <= 0 or invested_amount < 0:
        return None

    units = invested_amount / historical_price
    current_value = units * current_price
    result = HistoricalResult(
        total_contributed=invested_amount,
        units=units,
        final_value=current_value,
        profit=current_value - invested_amount,
        multiplier=_multiplier(current_value, invested_amount),
    )
    return _finite_or_none(result)


def project_compound_growth(
    initial_amount: float,
    periodic_amount: float,
    annual_rate: float,
    years: float,
) -> Optional[CompoundResult]:
    """
    Compound growth with a monthly contribution.

    The annual rate is converted to its monthly equivalent
    ``(1 + annual_rate) ** (1 / 12) - 1`` rather than ``annual_rate / 12``.
    """
    if compound_months(initial_amount, periodic_amount, annual_rate, years) is None:
        return None

    final = simulate_compound_path(initial_amount, periodic_amount, annual_rate, years)[-1]
    interest_earned = final.portfolio_value - final.amount_contributed
    result = CompoundResult(
        total_contributed=final.amount_contributed,
        final_value=final.portfolio_value,
        profit=interest_earned,
        interest_earned=interest_earned,
        multiplier=_multiplier(final.portfolio_value, final.amount_contributed),
    )
    return _finite_or_none(result)


def project_gain(invested_amount: float, percent_gain: float) -> Optional[GainResult]:
    """
    "If it gained X%, what would my money become?"

    The multiplier is the growth factor ``1 + percent_gain / 100``, so it is
    defined even when nothing was invested.
    """
    if not all_finite(invested_amount, percent_gain) or invested_amount < 0:
        return None

    multiplier = 1 + percent_gain / 100
    final_value = invested_amount * multiplier
    result = GainResult(
        total_contributed=invested_amount,
        percent_gain=percent_gain,
        final_value=final_value,
        profit=final_value - invested_amount,
        multiplier=multiplier,
    )
    return _finite_or_none(result)


__all__ = ["project_dca", "replay_historical", "project_compound_growth", "project_gain"]
