"""
app/domain/equipment.py

Value objects produced by the equipment analytics pipeline.

Every object here is created once per ingested batch and is read-only
afterward. Collections are stored as tuples; the type distribution is a
read-only mapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

FORECAST_LABELS: tuple[str, ...] = ("+1h", "+2h", "+3h", "+4h", "+5h")


class InvalidInputError(ValueError):
    """
    Raised when raw text cannot be interpreted as a delimited dataset at all.
    """


@dataclass(frozen=True)
class EquipmentRow:
    """
    One telemetry sample for a named piece of equipment.
    """

    id: str
    equipment_name: str
    equipment_type: str
    flowrate: float
    pressure: float
    temperature: float
    uploaded_at: datetime


@dataclass(frozen=True)
class RowIssue:
    """
    One parser diagnostic: a dropped line or a coerced field.
    """

    row_number: int
    message: str
    column: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class ParsedBatch:
    """
    Parser output: typed rows plus the diagnostics gathered while reading.
    """

    rows: tuple[EquipmentRow, ...]
    rows_dropped: int = 0
    issues: tuple[RowIssue, ...] = ()


@dataclass(frozen=True)
class DatasetSummary:
    """
    Count, per-parameter means and the equipment type distribution.
    """

    total_count: int
    average_flowrate: float
    average_pressure: float
    average_temperature: float
    type_distribution: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if not isinstance(self.type_distribution, MappingProxyType):
            object.__setattr__(
                self,
                "type_distribution",
                MappingProxyType(dict(self.type_distribution)),
            )

    @classmethod
    def empty(cls) -> "DatasetSummary":
        return cls(
            total_count=0,
            average_flowrate=0.0,
            average_pressure=0.0,
            average_temperature=0.0,
        )


@dataclass(frozen=True)
class AnomalyFinding:
    """
    One flagged row with the reasons it was flagged and its severity.
    """

    row_id: str
    equipment_name: str
    equipment_type: str
    flowrate: float
    pressure: float
    temperature: float
    reasons: tuple[str, ...]
    score: float


@dataclass(frozen=True)
class AnomalyReport:
    """
    Findings ordered by descending severity.
    """

    total_anomalies: int
    rows_flagged: frozenset[str]
    anomalies: tuple[AnomalyFinding, ...]

    @classmethod
    def empty(cls) -> "AnomalyReport":
        return cls(total_anomalies=0, rows_flagged=frozenset(), anomalies=())


@dataclass(frozen=True)
class HealthScore:
    """
    0-100 health index for one equipment row; higher is closer to average.
    """

    equipment_name: str
    score: int


@dataclass(frozen=True)
class ForecastResult:
    """
    Five-step projection per parameter.
    """

    flowrate_future: tuple[float, ...]
    pressure_future: tuple[float, ...]
    temperature_future: tuple[float, ...]
    labels: tuple[str, ...] = FORECAST_LABELS


@dataclass(frozen=True)
class QualityReport:
    """
    Data-quality audit outcome.

    ``outliers`` is kept for report layout compatibility and is always 0;
    outliers are reported by the anomaly detector.
    """

    score: int
    missing_values: int
    negative_values: int
    duplicates: int
    issues: tuple[str, ...]
    outliers: int = 0


@dataclass(frozen=True)
class AnalysisResult:
    """
    Immutable aggregate of one analysed batch.
    """

    id: str
    file_name: str
    uploaded_at: datetime
    summary: DatasetSummary
    rows: tuple[EquipmentRow, ...]
    anomalies: AnomalyReport
    health_scores: tuple[HealthScore, ...]
    forecast: ForecastResult
    quality: QualityReport
    insights: tuple[str, ...]
    parse_issues: tuple[RowIssue, ...] = ()
