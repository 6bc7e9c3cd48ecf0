"""
app/domain package marker.
"""

from app.domain.equipment import (
    AnalysisResult,
    AnomalyFinding,
    AnomalyReport,
    DatasetSummary,
    EquipmentRow,
    ForecastResult,
    HealthScore,
    InvalidInputError,
    ParsedBatch,
    QualityReport,
    RowIssue,
)

__all__ = [
    "AnalysisResult",
    "AnomalyFinding",
    "AnomalyReport",
    "DatasetSummary",
    "EquipmentRow",
    "ForecastResult",
    "HealthScore",
    "InvalidInputError",
    "ParsedBatch",
    "QualityReport",
    "RowIssue",
]
