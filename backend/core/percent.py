"""Everyday percentage questions: "what is a% of b", "a is what % of b", "% change"."""

from __future__ import annotations

from typing import Any, Optional

from backend.core.inputs import all_finite
from backend.schemas.scenarios import PercentKind


def calculate_percent(kind: Any, a: float, b: float) -> Optional[float]:
    try:
        kind = PercentKind(kind)
    except ValueError:
        return None
    if not all_finite(a, b):
        return None

    if kind == PercentKind.WHAT_IS:
        return (a / 100) * b
    if kind == PercentKind.WHAT_PERCENT:
        return None if b == 0 else (a / b) * 100
    # change from a to b, relative to |a|
    return None if a == 0 else ((b - a) / abs(a)) * 100
