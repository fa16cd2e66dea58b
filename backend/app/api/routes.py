"""HTTP routes for the Flask API."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.config import Settings
from backend.core.paths import build_compound_chart, build_dca_chart
from backend.core.percent import calculate_percent
from backend.core.scenarios import (
    project_compound_growth,
    project_dca,
    project_gain,
    replay_historical,
)
from backend.core.timeline import value_at, value_at_fraction
from backend.logging_setup import get_logger
from backend.schemas.health import HealthResponse
from backend.schemas.scenarios import (
    CompoundRequest,
    CompoundResponse,
    DcaRequest,
    DcaResponse,
    GainRequest,
    GainResponse,
    HistoricalRequest,
    HistoricalResponse,
    PercentRequest,
    PercentResponse,
    ValueAtRequest,
    ValueAtResponse,
)

api_bp = Blueprint("api", __name__)
logger = get_logger(__name__)

DCA_HINT = "Enter an amount to invest, a price above zero and a horizon of at least one month."
HISTORICAL_HINT = "Enter an amount and prices above zero."
COMPOUND_HINT = "Enter a horizon above zero and an annual rate of at least -100%."
GAIN_HINT = "Enter an amount of zero or more and a percent gain."


def _settings() -> Settings:
    return current_app.config["SETTINGS"]


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected payload errors=%d", exc.error_count())
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(message="pong", env=_settings().env)
    return jsonify(response.model_dump())


@api_bp.post("/calc/dca")
def dca() -> Any:
    """DCA projection summary plus the sampled chart series."""
    payload = DcaRequest.model_validate(_payload())
    settings = _settings()
    logger.debug("dca request %s", payload.model_dump_json())

    if payload.initial_amount <= 0 and payload.periodic_amount <= 0:
        result = None
    else:
        result = project_dca(
            payload.initial_amount,
            payload.periodic_amount,
            payload.reference_price,
            payload.target_price,
            payload.horizon_periods,
            payload.price_model,
            volatility=settings.dca_volatility,
            price_floor_ratio=settings.dca_price_floor_ratio,
        )

    if result is None:
        logger.info("dca no result model=%s", payload.price_model.value)
        return jsonify(DcaResponse(result=None, hint=DCA_HINT).model_dump(mode="json"))

    series = build_dca_chart(
        payload.initial_amount,
        payload.periodic_amount,
        payload.reference_price,
        payload.target_price,
        payload.horizon_periods,
        payload.price_model,
        max_points=settings.dca_chart_points,
        volatility=settings.dca_volatility,
        price_floor_ratio=settings.dca_price_floor_ratio,
    )
    return jsonify(DcaResponse(result=result, series=series).model_dump(mode="json"))


@api_bp.post("/calc/historical")
def historical() -> Any:
    """What a past investment would be worth today."""
    payload = HistoricalRequest.model_validate(_payload())
    result = replay_historical(payload.invested_amount, payload.historical_price, payload.current_price)
    if result is None:
        logger.info("historical no result")
        return jsonify(HistoricalResponse(result=None, hint=HISTORICAL_HINT).model_dump(mode="json"))
    return jsonify(HistoricalResponse(result=result).model_dump(mode="json"))


@api_bp.post("/calc/compound")
def compound() -> Any:
    """Compound growth summary plus the sampled chart series."""
    payload = CompoundRequest.model_validate(_payload())
    logger.debug("compound request %s", payload.model_dump_json())

    result = project_compound_growth(
        payload.initial_amount, payload.periodic_amount, payload.annual_rate, payload.years
    )
    if result is None:
        logger.info("compound no result")
        return jsonify(CompoundResponse(result=None, hint=COMPOUND_HINT).model_dump(mode="json"))

    series = build_compound_chart(
        payload.initial_amount,
        payload.periodic_amount,
        payload.annual_rate,
        payload.years,
        max_points=_settings().compound_chart_points,
    )
    return jsonify(CompoundResponse(result=result, series=series).model_dump(mode="json"))


@api_bp.post("/calc/gain")
def gain() -> Any:
    """What a lump sum becomes after a given percent gain or loss."""
    payload = GainRequest.model_validate(_payload())
    result = project_gain(payload.invested_amount, payload.percent_gain)
    if result is None:
        logger.info("gain no result")
        return jsonify(GainResponse(result=None, hint=GAIN_HINT).model_dump(mode="json"))
    return jsonify(GainResponse(result=result).model_dump(mode="json"))


@api_bp.post("/chart/value-at")
def chart_value_at() -> Any:
    """Scrub reading for a period or a 0..1 pointer fraction."""
    payload = ValueAtRequest.model_validate(_payload())
    if payload.fraction is not None:
        point = value_at_fraction(payload.series, payload.fraction)
    else:
        point = value_at(payload.series, payload.period)
    return jsonify(ValueAtResponse(point=point).model_dump(mode="json"))


@api_bp.post("/calc/percent")
def percent() -> Any:
    payload = PercentRequest.model_validate(_payload())
    result = calculate_percent(payload.kind, payload.a, payload.b)
    return jsonify(PercentResponse(result=result).model_dump(mode="json"))
