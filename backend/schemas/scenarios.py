"""Data contracts for scenario calculations and chart series."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PriceModel(str, Enum):
    BEST_CASE = "bestCase"
    LINEAR = "linear"
    VOLATILE = "volatile"


class PercentKind(str, Enum):
    WHAT_IS = "what_is"
    WHAT_PERCENT = "what_percent"
    CHANGE = "change"


class TimeSeriesPoint(BaseModel):
    """Single month of a simulated path."""

    model_config = ConfigDict(frozen=True)

    period: int = Field(..., ge=0)
    portfolio_value: float
    amount_contributed: float


class ScrubPoint(BaseModel):
    """Interpolated reading between two sampled points."""

    model_config = ConfigDict(frozen=True)

    period: float = Field(..., ge=0)
    portfolio_value: float
    amount_contributed: float


class ScenarioResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_contributed: float
    final_value: float
    profit: float
    multiplier: float


class DcaResult(ScenarioResult):
    total_units: float


class HistoricalResult(ScenarioResult):
    units: float


class GainResult(ScenarioResult):
    percent_gain: float


class CompoundResult(ScenarioResult):
    interest_earned: float


# -----------------------------
# Request / response bodies
# -----------------------------


class DcaRequest(BaseModel):
    """Inputs for a forward-looking DCA projection."""

    model_config = ConfigDict(extra="forbid")

    initial_amount: float = Field(0.0, description="Lump sum invested at period 0.")
    periodic_amount: float = Field(0.0, description="Amount invested every month.")
    reference_price: float = Field(..., description="Asset price today.")
    target_price: float = Field(..., description="Asset price at the horizon.")
    horizon_periods: float = Field(..., description="Number of months projected.")
    price_model: PriceModel = PriceModel.BEST_CASE


class HistoricalRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    invested_amount: float
    historical_price: float
    current_price: float


class CompoundRequest(BaseModel):
    """Inputs for compound growth with monthly contributions."""

    model_config = ConfigDict(extra="forbid")

    initial_amount: float = 0.0
    periodic_amount: float = Field(0.0, description="Contribution added every month.")
    annual_rate: float = Field(
        ...,
        description="Annualized return rate expressed as a decimal (e.g. 0.10 for 10%).",
    )
    years: float = Field(..., description="Time horizon in years.")


class GainRequest(BaseModel):
    """Inputs for a percent-gain lookup on a lump sum."""

    model_config = ConfigDict(extra="forbid")

    invested_amount: float
    percent_gain: float = Field(..., description="Gain in percent, e.g. 25 for +25% or -40 for a loss.")


class ValueAtRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    series: List[TimeSeriesPoint]
    period: Optional[float] = None
    fraction: Optional[float] = None

    @model_validator(mode="after")
    def ensure_single_position(self) -> "ValueAtRequest":
        if (self.period is None) == (self.fraction is None):
            raise ValueError("provide exactly one of period or fraction")
        return self


class PercentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: PercentKind
    a: float
    b: float


class DcaResponse(BaseModel):
    result: Optional[DcaResult]
    series: List[TimeSeriesPoint] = Field(default_factory=list)
    hint: Optional[str] = None


class HistoricalResponse(BaseModel):
    result: Optional[HistoricalResult]
    hint: Optional[str] = None


class CompoundResponse(BaseModel):
    result: Optional[CompoundResult]
    series: List[TimeSeriesPoint] = Field(default_factory=list)
    hint: Optional[str] = None


class GainResponse(BaseModel):
    result: Optional[GainResult]
    hint: Optional[str] = None


class ValueAtResponse(BaseModel):
    point: Optional[Union[TimeSeriesPoint, ScrubPoint]]


class PercentResponse(BaseModel):
    result: Optional[float]
