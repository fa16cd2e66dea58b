"""Seeded pseudo-random noise for the volatile price model.

Every stream is built from an explicit seed; nothing here touches the
``random`` module or the clock, so identical scenario inputs always replay
the same price path.
"""

from __future__ import annotations

import math
from typing import Callable

UINT32_MASK = 0xFFFFFFFF
MULBERRY_INCREMENT = 0x6D2B79F5
UINT32_RANGE = 4294967296.0

# substitute for a zero first draw so log() stays finite
GAUSSIAN_FLOOR = 1e-4

NoiseStream = Callable[[], float]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +inf."""
    return int(math.floor(value + 0.5))


def _imul(a: int, b: int) -> int:
    return (a * b) & UINT32_MASK


def make_stream(seed: int) -> NoiseStream:
    """
    Mulberry32 generator over 32-bit unsigned arithmetic.

    Returns a zero-argument callable producing floats in [0, 1). The seed is
    reduced modulo 2**32, so any integer (negative or huge) is accepted.
    """
    state = int(seed) & UINT32_MASK

    def next_uniform() -> float:
        nonlocal state
        state = (state + MULBERRY_INCREMENT) & UINT32_MASK
        t = _imul(state ^ (state >> 15), state | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & UINT32_MASK
        return ((t ^ (t >> 14)) & UINT32_MASK) / UINT32_RANGE

    return next_uniform


def hash_inputs(
    initial_amount: float,
    periodic_amount: float,
    reference_price: float,
    target_price: float,
    horizon_periods: float,
) -> int:
    """Weighted sum of the five scenario scalars, scaled to cents and rounded."""
    weighted = (
        initial_amount * 7
        + periodic_amount * 13
        + reference_price * 31
        + target_price * 37
        + horizon_periods * 41
    )
    return round_half_up(weighted * 100)


def gaussian(stream: NoiseStream) -> float:
    """Box-Muller transform; consumes exactly two draws from ``stream``."""
    u1 = stream()
    u2 = stream()
    return math.sqrt(-2.0 * math.log(u1 or GAUSSIAN_FLOOR)) * math.cos(2.0 * math.pi * u2)


__all__ = [
    "NoiseStream",
    "make_stream",
    "hash_inputs",
    "gaussian",
    "round_half_up",
]
