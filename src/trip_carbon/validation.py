"""Input coercion for the permissive numeric parameters of the engine.

The engine never rejects a malformed distance or emission figure; it maps
it onto ``0.0`` here, in one place, and logs the substitution at debug level.
"""

from __future__ import annotations

import logging
import math
import numbers
from decimal import Decimal

LOGGER = logging.getLogger(__name__)

__all__ = ["coerce_number", "coerce_distance"]


def coerce_number(value: object) -> float:
    """Return ``value`` as a finite float, or ``0.0`` when that is impossible.

    Any real number (``Decimal``, ``Fraction`` and numpy scalars included) and
    numeric strings are accepted; booleans, ``None``, NaN and infinities are
    not.
    """

    if isinstance(value, bool) or value is None:
        number = math.nan
    elif isinstance(value, (numbers.Real, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            number = math.nan
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            number = math.nan
    else:
        number = math.nan

    if not math.isfinite(number):
        LOGGER.debug("Coercing non-numeric input %r to 0", value)
        return 0.0
    return number


def coerce_distance(value: object) -> float:
    """Return a usable, non-negative distance in kilometres.

    Args:
        value: Raw distance as supplied by the caller.

    Returns:
        ``value`` as a float, or ``0.0`` for negative or non-numeric input.
    """

    distance = coerce_number(value)
    if distance < 0:
        LOGGER.debug("Coercing negative distance %r to 0", value)
        return 0.0
    return distance
