"""Small numeric helpers shared across the engine.

Rounding follows the half-up convention used by the score displays
(``238.5 -> 239``), not Python's banker's rounding.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from negative infinity."""
    return int(math.floor(value + 0.5))


def round1(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def round2(value: float) -> float:
    """Round half-up to two decimal places."""
    return math.floor(value * 100 + 0.5) / 100


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` for a zero or non-finite denominator."""
    if not denominator or not math.isfinite(denominator):
        return default
    return numerator / denominator
