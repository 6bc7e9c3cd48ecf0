"""
anomaly/detector.py

Fixed-threshold z-score anomaly detector.

A row is flagged on a parameter when

    |value - mean| > THRESHOLD_SIGMA * std

where ``mean`` comes from the DatasetSummary and ``std`` is the population
standard deviation around that mean. A parameter with zero spread never
triggers. Each triggered parameter adds a fixed weight to the row score,
which is capped at 1.0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from anomaly.base import BaseAnomalyDetector
from anomaly.statistics import population_std
from app.domain.equipment import AnomalyFinding, AnomalyReport, DatasetSummary, EquipmentRow


@dataclass(frozen=True)
class _ParameterRule:
    reason: str
    weight: float
    value_of: Callable[[EquipmentRow], float]
    mean_of: Callable[[DatasetSummary], float]


class ZScoreAnomalyDetector(BaseAnomalyDetector):
    """
    Flags rows deviating more than 2.5 population standard deviations.

    Parameter weights (flow 0.3, pressure 0.3, temperature 0.4) sum to
    1.0. Reasons are appended in that parameter order.
    """

    THRESHOLD_SIGMA: float = 2.5
    MAX_SCORE: float = 1.0

    _RULES: tuple[_ParameterRule, ...] = (
        _ParameterRule(
            reason="Abnormal Flowrate",
            weight=0.3,
            value_of=lambda row: row.flowrate,
            mean_of=lambda summary: summary.average_flowrate,
        ),
        _ParameterRule(
            reason="Abnormal Pressure",
            weight=0.3,
            value_of=lambda row: row.pressure,
            mean_of=lambda summary: summary.average_pressure,
        ),
        _ParameterRule(
            reason="Abnormal Temperature",
            weight=0.4,
            value_of=lambda row: row.temperature,
            mean_of=lambda summary: summary.average_temperature,
        ),
    )

    def detect(
        self,
        rows: Sequence[EquipmentRow],
        summary: DatasetSummary,
    ) -> AnomalyReport:
        if not rows:
            return AnomalyReport.empty()

        limits: list[tuple[_ParameterRule, float, float]] = []
        for rule in self._RULES:
            mean = rule.mean_of(summary)
            std = population_std([rule.value_of(row) for row in rows], mean)
            limits.append((rule, mean, std))

        findings: list[AnomalyFinding] = []
        for row in rows:
            reasons: list[str] = []
            score = 0.0
            for rule, mean, std in limits:
                if std > 0.0 and abs(rule.value_of(row) - mean) > self.THRESHOLD_SIGMA * std:
                    reasons.append(rule.reason)
                    score += rule.weight

            if reasons:
                findings.append(
                    AnomalyFinding(
                        row_id=row.id,
                        equipment_name=row.equipment_name,
                        equipment_type=row.equipment_type,
                        flowrate=row.flowrate,
                        pressure=row.pressure,
                        temperature=row.temperature,
                        reasons=tuple(reasons),
                        score=min(score, self.MAX_SCORE),
                    )
                )

        # sorted() is stable, so equal scores keep ingestion order.
        ordered = sorted(findings, key=lambda finding: finding.score, reverse=True)
        return AnomalyReport(
            total_anomalies=len(ordered),
            rows_flagged=frozenset(finding.row_id for finding in ordered),
            anomalies=tuple(ordered),
        )
