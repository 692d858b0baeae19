"""Score rounding helpers shared by every scoring service."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (78.5 -> 79, not 78)."""
    return int(math.floor(value + 0.5))


def clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def round_one_decimal(value: float) -> float:
    """Half-up rounding to one decimal place (0.75 -> 0.8)."""
    return round_half_up(value * 10) / 10
