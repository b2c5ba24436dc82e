"""Shared numeric helpers for the scoring models."""

import math


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """Clamp to [lower, upper]."""
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round halves toward positive infinity (67.5 -> 68, 49.5 -> 50)."""
    return int(math.floor(value + 0.5))
