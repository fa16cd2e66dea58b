from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str
    cors_origins: Tuple[str, ...]

    dca_volatility: float
    dca_price_floor_ratio: float
    dca_chart_points: int
    compound_chart_points: int


def _env(key: str, default: str) -> str:
    # empty env vars count as "not set"
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def load_settings() -> Settings:
    """
    Loads settings from the environment (and a local .env, if present).
    """
    load_dotenv()

    origins = tuple(
        origin.strip() for origin in _env("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",") if origin.strip()
    )

    return Settings(
        env=_env("APP_ENV", "dev"),
        log_level=_env("LOG_LEVEL", "INFO"),
        cors_origins=origins,
        dca_volatility=float(_env("DCA_VOLATILITY", "0.15")),
        dca_price_floor_ratio=float(_env("DCA_PRICE_FLOOR_RATIO", "0.01")),
        dca_chart_points=int(_env("DCA_CHART_POINTS", "37")),
        compound_chart_points=int(_env("COMPOUND_CHART_POINTS", "49")),
    )
