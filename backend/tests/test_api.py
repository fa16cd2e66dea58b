from __future__ import annotations

import pytest
from flask.testing import FlaskClient


def dca_payload(**overrides) -> dict:
    payload = {
        "initial_amount": 1000,
        "periodic_amount": 100,
        "reference_price": 50000,
        "target_price": 100000,
        "horizon_periods": 12,
        "price_model": "bestCase",
    }
    payload.update(overrides)
    return payload


def test_dca_endpoint_returns_result_and_series(client: FlaskClient):
    resp = client.post("/api/calc/dca", json=dca_payload())
    assert resp.status_code == 200
    body = resp.get_json()

    assert body["result"]["total_contributed"] == pytest.approx(2200)
    assert body["result"]["final_value"] == pytest.approx(4400)
    assert body["result"]["multiplier"] == pytest.approx(2)
    assert body["hint"] is None

    series = body["series"]
    assert [p["period"] for p in series] == list(range(13))
    assert series[0]["amount_contributed"] == 1000
    assert series[-1]["portfolio_value"] == pytest.approx(body["result"]["final_value"])


def test_dca_long_horizon_is_sampled(client: FlaskClient):
    resp = client.post("/api/calc/dca", json=dca_payload(horizon_periods=120, price_model="linear"))
    body = resp.get_json()
    assert len(body["series"]) == 37
    assert body["series"][-1]["period"] == 120
    assert body["series"][-1]["portfolio_value"] == pytest.approx(body["result"]["final_value"])


def test_dca_volatile_endpoint_is_repeatable(client: FlaskClient):
    first = client.post("/api/calc/dca", json=dca_payload(price_model="volatile")).get_json()
    second = client.post("/api/calc/dca", json=dca_payload(price_model="volatile")).get_json()
    assert first == second


def test_dca_without_any_investment_returns_hint(client: FlaskClient):
    resp = client.post("/api/calc/dca", json=dca_payload(initial_amount=0, periodic_amount=0))
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["result"] is None
    assert body["series"] == []
    assert body["hint"]


def test_dca_zero_reference_price_returns_hint(client: FlaskClient):
    resp = client.post("/api/calc/dca", json=dca_payload(reference_price=0))
    assert resp.status_code == 200
    assert resp.get_json()["result"] is None


def test_dca_unknown_price_model_is_rejected(client: FlaskClient):
    resp = client.post("/api/calc/dca", json=dca_payload(price_model="moon"))
    assert resp.status_code == 422
    assert "detail" in resp.get_json()


def test_dca_missing_field_is_rejected(client: FlaskClient):
    payload = dca_payload()
    del payload["target_price"]
    resp = client.post("/api/calc/dca", json=payload)
    assert resp.status_code == 422


def test_historical_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/calc/historical",
        json={"invested_amount": 1000, "historical_price": 100, "current_price": 50},
    )
    assert resp.status_code == 200
    result = resp.get_json()["result"]
    assert result["units"] == 10
    assert result["final_value"] == 500
    assert result["profit"] == -500
    assert result["multiplier"] == 0.5


def test_historical_zero_price_returns_hint(client: FlaskClient):
    resp = client.post(
        "/api/calc/historical",
        json={"invested_amount": 1000, "historical_price": 0, "current_price": 50},
    )
    body = resp.get_json()
    assert body["result"] is None
    assert body["hint"]


def test_compound_endpoint_returns_sampled_series(client: FlaskClient):
    resp = client.post(
        "/api/calc/compound",
        json={"initial_amount": 1000, "periodic_amount": 100, "annual_rate": 0.07, "years": 30},
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert len(body["series"]) == 49
    assert body["series"][0]["portfolio_value"] == 1000
    assert body["series"][-1]["period"] == 360
    assert body["series"][-1]["portfolio_value"] == pytest.approx(body["result"]["final_value"])
    assert body["result"]["interest_earned"] == pytest.approx(
        body["result"]["final_value"] - body["result"]["total_contributed"]
    )


def test_compound_zero_years_returns_hint(client: FlaskClient):
    resp = client.post(
        "/api/calc/compound",
        json={"initial_amount": 1000, "periodic_amount": 100, "annual_rate": 0.1, "years": 0},
    )
    body = resp.get_json()
    assert body["result"] is None
    assert body["series"] == []


def test_value_at_interpolates_by_fraction(client: FlaskClient):
    series = [
        {"period": 0, "portfolio_value": 100, "amount_contributed": 100},
        {"period": 10, "portfolio_value": 200, "amount_contributed": 150},
    ]
    resp = client.post("/api/chart/value-at", json={"series": series, "fraction": 0.5})
    assert resp.status_code == 200
    point = resp.get_json()["point"]
    assert point["period"] == 5
    assert point["portfolio_value"] == pytest.approx(150)
    assert point["amount_contributed"] == pytest.approx(125)


def test_value_at_by_period_beyond_end(client: FlaskClient):
    series = [
        {"period": 0, "portfolio_value": 100, "amount_contributed": 100},
        {"period": 10, "portfolio_value": 200, "amount_contributed": 150},
    ]
    resp = client.post("/api/chart/value-at", json={"series": series, "period": 42})
    assert resp.get_json()["point"] == {"period": 10, "portfolio_value": 200.0, "amount_contributed": 150.0}


def test_value_at_empty_series(client: FlaskClient):
    resp = client.post("/api/chart/value-at", json={"series": [], "period": 3})
    assert resp.get_json() == {"point": None}


def test_value_at_requires_exactly_one_position(client: FlaskClient):
    resp = client.post("/api/chart/value-at", json={"series": [], "period": 3, "fraction": 0.2})
    assert resp.status_code == 422
    resp = client.post("/api/chart/value-at", json={"series": []})
    assert resp.status_code == 422


def test_percent_endpoint(client: FlaskClient):
    resp = client.post("/api/calc/percent", json={"kind": "change", "a": 50, "b": 75})
    assert resp.status_code == 200
    assert resp.get_json()["result"] == pytest.approx(50)

    resp = client.post("/api/calc/percent", json={"kind": "what_percent", "a": 5, "b": 0})
    assert resp.get_json()["result"] is None


def test_value_at_non_finite_period_returns_no_point(client: FlaskClient):
    series = [
        {"period": 0, "portfolio_value": 1, "amount_contributed": 1},
        {"period": 10, "portfolio_value": 2, "amount_contributed": 2},
    ]
    resp = client.post("/api/chart/value-at", json={"series": series, "period": float("nan")})
    assert resp.status_code == 200
    assert resp.get_json() == {"point": None}


def test_gain_endpoint(client: FlaskClient):
    resp = client.post("/api/calc/gain", json={"invested_amount": 1000, "percent_gain": 25})
    assert resp.status_code == 200
    result = resp.get_json()["result"]
    assert result["final_value"] == pytest.approx(1250)
    assert result["profit"] == pytest.approx(250)
    assert result["multiplier"] == pytest.approx(1.25)
    assert result["percent_gain"] == 25


def test_gain_negative_amount_returns_hint(client: FlaskClient):
    resp = client.post("/api/calc/gain", json={"invested_amount": -5, "percent_gain": 25})
    body = resp.get_json()
    assert body["result"] is None
    assert body["hint"]


def test_compound_overflow_returns_hint(client: FlaskClient):
    resp = client.post(
        "/api/calc/compound",
        json={"initial_amount": 1e300, "periodic_amount": 0, "annual_rate": 1e6, "years": 100},
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["result"] is None
    assert body["series"] == []
