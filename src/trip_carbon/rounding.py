"""Decimal rounding helpers shared by the emission engine."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

__all__ = ["round_half_up"]

_MIN_PRECISION = 28


def round_half_up(value: float, places: int = 2) -> float:
    """Round ``value`` to ``places`` decimals, halves away from zero.

    The float is converted through its shortest ``repr`` so that values such
    as ``1.005`` round to ``1.01`` instead of inheriting binary noise. The
    decimal context is widened to fit the integer digits of large values.

    Args:
        value: Number to round. Non-finite values are returned unchanged.
        places: Number of decimal places to keep.

    Returns:
        Rounded value as a float. Negative zero is normalised to ``0.0``.
    """

    number = float(value)
    if not math.isfinite(number):
        return number
    exact = Decimal(repr(number))
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = max(_MIN_PRECISION, exact.adjusted() + places + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded) + 0.0
