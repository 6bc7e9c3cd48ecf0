"""
forecast/base.py

Abstract base class for all forecast model implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class BaseForecastModel(ABC):
    """
    Contract for forecast model implementations.

    Subclasses receive a sequence of historical numeric values and must
    return a fixed-length projection.

    No I/O, no logging, and no side effects are permitted inside
    :meth:`forecast`.
    """

    #: Number of future steps every implementation projects.
    HORIZON: int = 5

    @abstractmethod
    def forecast(self, values: Sequence[float]) -> tuple[float, ...]:
        """
        Project the next :attr:`HORIZON` values from *values*.

        Parameters
        ----------
        values:
            Ordered sequence of historical numeric observations, oldest
            first. May be empty; implementations define a fallback for
            short inputs instead of raising.

        Returns
        -------
        tuple[float, ...]
            Exactly :attr:`HORIZON` projected values, nearest step first.
        """
