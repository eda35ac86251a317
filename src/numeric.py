"""
Numeric helpers shared by the calculator and the locale layer.

Rounding is half-up (2.5 -> 3). Python's built-in round() rounds
halves to even and would give 2.
"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +inf."""
    return int(math.floor(value + 0.5))


def is_positive(value) -> bool:
    """True for finite numbers strictly greater than zero."""
    try:
        return math.isfinite(value) and value > 0
    except TypeError:
        return False
