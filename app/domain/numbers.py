"""
app/domain/numbers.py

Decimal rounding shared by the summary and the forecast.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

_NO_FRACTION_ABOVE: float = 2.0 ** 52

_QUANTUMS: dict[int, Decimal] = {}


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round *value* to *places* decimals, sending exact halves away from zero.

    The float is converted exactly, so 45.125 becomes 45.13 while 1.005
    (stored as 1.00499...) stays 1.0. Non-finite input, and magnitudes
    where a float carries no fractional digits, are returned as is.
    """

    if not math.isfinite(value) or abs(value) >= _NO_FRACTION_ABOVE:
        return value
    quantum = _QUANTUMS.setdefault(places, Decimal(1).scaleb(-places))
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
