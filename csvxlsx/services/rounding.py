from __future__ import annotations

import math

"""Half-away-from-zero rounding on binary floats.

The value is scaled by 10**places, rounded to a whole number, and scaled
back. Scaling is done in float arithmetic, so decimal inputs that are not
exact binary fractions can land on either side of a tie:
2.675 * 100 == 267.5 (rounds to 2.68) while 1.005 * 100 == 100.49999999999999
(rounds to 1.0).
"""

__all__ = [
    "round_half_away",
    "round_to_integer",
]


def _round_half_away_whole(value: float) -> float:
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # Compare the remainder instead of flooring magnitude + 0.5, which is off
    # by one for 0.49999999999999994
    if magnitude - whole >= 0.5:
        whole += 1
    return math.copysign(whole, value)


def round_half_away(value: float, places: int) -> float:
    """Round value to places decimals; negative places leave it unchanged."""
    if places < 0:
        return value
    factor = 10.0 ** places
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return _round_half_away_whole(scaled) / factor


def round_to_integer(value: float) -> int:
    """Round to the nearest whole number, ties away from zero."""
    return int(_round_half_away_whole(value))
