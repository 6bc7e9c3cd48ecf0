"""
app/services/summary_service.py

Dataset summary aggregation.

Formulas
--------
average_<parameter> = Σ value / total_count, 2 decimals, halves rounded up
type_distribution   = occurrences of each equipment_type, first-seen order

Zero rows produce the all-zero summary with an empty distribution.
"""

from __future__ import annotations

from typing import Sequence

from app.domain.equipment import DatasetSummary, EquipmentRow
from app.domain.numbers import round_half_up


class SummaryAggregator:
    """
    Stateless summary calculation over a fully materialized batch.
    """

    def summarize(self, rows: Sequence[EquipmentRow]) -> DatasetSummary:
        total_count = len(rows)
        if total_count == 0:
            return DatasetSummary.empty()

        flow_sum = 0.0
        pressure_sum = 0.0
        temperature_sum = 0.0
        distribution: dict[str, int] = {}

        for row in rows:
            flow_sum += row.flowrate
            pressure_sum += row.pressure
            temperature_sum += row.temperature
            distribution[row.equipment_type] = distribution.get(row.equipment_type, 0) + 1

        return DatasetSummary(
            total_count=total_count,
            average_flowrate=round_half_up(flow_sum / total_count),
            average_pressure=round_half_up(pressure_sum / total_count),
            average_temperature=round_half_up(temperature_sum / total_count),
            type_distribution=distribution,
        )
