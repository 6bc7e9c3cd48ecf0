"""
health/scoring.py

Per-row equipment health index.

Each parameter's relative deviation from the batch mean is weighted into a
composite, and the composite is mapped onto a 0-100 scale where 100 means
the row sits exactly on the batch averages.
"""

from __future__ import annotations

import math
from typing import Sequence

from app.domain.equipment import DatasetSummary, EquipmentRow, HealthScore
from health.normalizer import DeviationNormalizer


class EquipmentHealthModel:
    """Weighted deviation health model.

    composite = 0.3 * flow_dev + 0.3 * pressure_dev + 0.4 * temperature_dev
    score     = clamp(100 - composite * 100, 0, 100), rounded half up

    Every row yields its own entry; rows sharing an equipment name are not
    merged. Output is ordered ascending so the least healthy rows come
    first.
    """

    # Scoring weights; must sum to 1.0
    FLOW_WEIGHT: float = 0.3
    PRESSURE_WEIGHT: float = 0.3
    TEMPERATURE_WEIGHT: float = 0.4

    MIN_SCORE: float = 0.0
    MAX_SCORE: float = 100.0

    def __init__(self) -> None:
        """Initialize the model with a shared DeviationNormalizer instance."""
        self._normalizer = DeviationNormalizer()

    def score(
        self,
        rows: Sequence[EquipmentRow],
        summary: DatasetSummary,
    ) -> tuple[HealthScore, ...]:
        """Score every row against the batch summary.

        Args:
            rows: Rows of the batch in ingestion order.
            summary: Summary computed from the same rows.

        Returns:
            One HealthScore per row, sorted by ascending score. Ties keep
            ingestion order.
        """
        scores = [
            HealthScore(equipment_name=row.equipment_name, score=self.score_row(row, summary))
            for row in rows
        ]
        return tuple(sorted(scores, key=lambda item: item.score))

    def score_row(self, row: EquipmentRow, summary: DatasetSummary) -> int:
        n = self._normalizer

        flow_dev = n.relative_deviation(row.flowrate, summary.average_flowrate)
        pressure_dev = n.relative_deviation(row.pressure, summary.average_pressure)
        temperature_dev = n.relative_deviation(row.temperature, summary.average_temperature)

        composite = (
            flow_dev * self.FLOW_WEIGHT
            + pressure_dev * self.PRESSURE_WEIGHT
            + temperature_dev * self.TEMPERATURE_WEIGHT
        )
        bounded = n.clamp(self.MAX_SCORE - composite * 100.0, self.MIN_SCORE, self.MAX_SCORE)
        return int(math.floor(bounded + 0.5))
