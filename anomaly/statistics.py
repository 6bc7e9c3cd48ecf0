"""
anomaly/statistics.py

Dispersion helpers for the anomaly detector.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


def population_std(values: Sequence[float], center: float) -> float:
    """
    Population standard deviation of *values* around a supplied centre.

    The centre is usually the (rounded) summary mean rather than the exact
    arithmetic mean, so ``np.std`` cannot be used directly. No Bessel
    correction is applied. An empty input returns 0.0.
    """

    if len(values) == 0:
        return 0.0
    array = np.asarray(values, dtype=np.float64)
    return float(np.sqrt(np.mean((array - center) ** 2)))
