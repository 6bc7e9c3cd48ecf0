"""
insights/rules.py

Deterministic insight rules over one analysed batch.
"""

from __future__ import annotations

from typing import Sequence

from app.domain.equipment import AnomalyReport, DatasetSummary, EquipmentRow
from insights.base import BaseInsightRule


# ---------------------------------------------------------------------------
# Thresholds
# ---------------------------------------------------------------------------

HIGH_PRESSURE_THRESHOLD_BAR: float = 50.0
PUMP_TYPE_MARKER: str = "pump"


class AnomalyShareRule(BaseInsightRule):
    """Share of rows flagged by the anomaly detector."""

    def evaluate(
        self,
        rows: Sequence[EquipmentRow],
        summary: DatasetSummary,
        anomalies: AnomalyReport,
    ) -> str | None:
        if anomalies.total_anomalies <= 0 or not rows:
            return None
        pct = anomalies.total_anomalies / len(rows) * 100.0
        return (
            f"Anomaly Alert: {pct:.1f}% of equipment showed abnormal "
            f"operational parameters."
        )


class HighPressureRule(BaseInsightRule):
    """Average pressure above the high-load threshold."""

    def __init__(self, threshold: float = HIGH_PRESSURE_THRESHOLD_BAR) -> None:
        self._threshold = threshold

    def evaluate(
        self,
        rows: Sequence[EquipmentRow],
        summary: DatasetSummary,
        anomalies: AnomalyReport,
    ) -> str | None:
        if summary.average_pressure <= self._threshold:
            return None
        return (
            f"High Pressure System: Average pressure is {summary.average_pressure} bar, "
            f"indicating a high-load environment."
        )


class PumpFlowRule(BaseInsightRule):
    """Pump subgroup flow compared with the global mean flow."""

    def evaluate(
        self,
        rows: Sequence[EquipmentRow],
        summary: DatasetSummary,
        anomalies: AnomalyReport,
    ) -> str | None:
        pump_flows = [
            row.flowrate
            for row in rows
            if PUMP_TYPE_MARKER in row.equipment_type.casefold()
        ]
        if not pump_flows:
            return None

        pump_average = sum(pump_flows) / len(pump_flows)
        if pump_average <= summary.average_flowrate:
            return None
        return (
            f"Pumps are driving system flow, averaging {pump_average:.1f} m³/h "
            f"(higher than global average)."
        )
