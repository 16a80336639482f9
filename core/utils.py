import math
from typing import Union


Number = Union[int, float]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 always rounding up.

    Python's round() uses banker's rounding (round(2.5) == 2), which would
    make score boundaries depend on parity.
    """
    return int(math.floor(value + 0.5))


def clamp(value: Number, lower: Number, upper: Number) -> Number:
    """Clamp value into [lower, upper]."""
    if lower > upper:
        raise ValueError(f"Invalid clamp bounds: {lower} > {upper}")
    return max(lower, min(upper, value))
