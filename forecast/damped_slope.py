"""
forecast/damped_slope.py

Short-horizon projection by damped last-slope extrapolation.
Standard Python only; the batch order is taken as time order.
"""

from __future__ import annotations

from typing import Sequence

from app.domain.equipment import FORECAST_LABELS, EquipmentRow, ForecastResult
from app.domain.numbers import round_half_up
from forecast.base import BaseForecastModel


class DampedSlopeForecast(BaseForecastModel):
    """
    Extends the last observed step with a damped slope.

        slope  = values[-1] - values[-2]
        step_k = values[-1] + slope * k * DAMPING      (k = 1 .. 5)

    Each step is rounded to 2 decimals, halves up. Only the last
    WINDOW_SIZE rows of a batch are considered when projecting rows.

    With fewer than 2 points the first step is the single value (or 0 for
    an empty series) and the remaining steps are 0.
    """

    WINDOW_SIZE: int = 10
    DAMPING: float = 0.5
    MIN_POINTS: int = 2

    def forecast(self, values: Sequence[float]) -> tuple[float, ...]:
        if len(values) < self.MIN_POINTS:
            first = values[0] if values else 0.0
            return (first,) + (0.0,) * (self.HORIZON - 1)

        last = values[-1]
        slope = last - values[-2]
        return tuple(
            round_half_up(last + slope * step * self.DAMPING)
            for step in range(1, self.HORIZON + 1)
        )

    def project_rows(self, rows: Sequence[EquipmentRow]) -> ForecastResult:
        """
        Forecast flowrate, pressure and temperature from the recent window.
        """

        recent = list(rows)[-self.WINDOW_SIZE:]
        return ForecastResult(
            flowrate_future=self.forecast([row.flowrate for row in recent]),
            pressure_future=self.forecast([row.pressure for row in recent]),
            temperature_future=self.forecast([row.temperature for row in recent]),
            labels=FORECAST_LABELS,
        )
