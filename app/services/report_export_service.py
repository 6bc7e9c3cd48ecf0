"""
app/services/report_export_service.py

Tabular export of an AnalysisResult for document and spreadsheet tools.

Supports seven sections, each fully flattened for tabular consumption:

    summary      : one metric/value row per summary figure
    distribution : equipment type / count
    data         : row snapshot (first N rows, N from EXPORT_DATA_ROWS)
    anomalies    : one row per finding, reasons joined with "; "
    health       : equipment name / score, worst first
    forecast     : one row per horizon label
    quality      : score, counts and audit sentences

Rendering (CSV stream, JSON body, paginated document) is left to the
caller; no transformation logic lives in the router.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from app.config import get_analysis_settings
from app.domain.equipment import AnalysisResult

VALID_SECTIONS: frozenset[str] = frozenset(
    {"summary", "distribution", "data", "anomalies", "health", "forecast", "quality"}
)


# ---------------------------------------------------------------------------
# Export result container
# ---------------------------------------------------------------------------


@dataclass
class ExportResult:
    """
    Flat tabular data ready for CSV or JSON serialisation.

    Attributes
    ----------
    rows:   Flat dict per row; all values are JSON-safe scalars or strings.
    fields: Ordered column names; deterministic across calls for the same section.
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    fields: list[str] = field(default_factory=list)


def _iso(dt: datetime | None) -> str | None:
    """Return UTC ISO-8601 string or None."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def _collect_fields(rows: list[dict[str, Any]]) -> list[str]:
    """
    Union all keys across rows while preserving first-seen insertion order.
    Guarantees a deterministic, stable column list for CSV headers.
    """
    seen: dict[str, None] = {}
    for row in rows:
        for k in row:
            seen.setdefault(k, None)
    return list(seen)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class ReportExportService:
    """
    Flatten analysis results into report sections.

    Every public method is read-only; results are never modified.
    """

    def __init__(self, *, data_rows: int | None = None) -> None:
        self._data_rows = max(1, data_rows) if data_rows is not None else None

    def export(self, result: AnalysisResult, *, section: str = "summary") -> ExportResult:
        """
        Flatten *section* of *result* into an :class:`ExportResult`.

        Raises
        ------
        ValueError: When *section* is not one of the supported values.
        """
        if section not in VALID_SECTIONS:
            raise ValueError(
                f"Unknown section {section!r}. Valid: {sorted(VALID_SECTIONS)}"
            )
        handler = getattr(self, f"_export_{section}")
        rows: list[dict[str, Any]] = handler(result)
        return ExportResult(rows=rows, fields=_collect_fields(rows))

    # ------------------------------------------------------------------
    # Section handlers
    # ------------------------------------------------------------------

    def _export_summary(self, result: AnalysisResult) -> list[dict[str, Any]]:
        summary = result.summary
        figures = (
            ("File", result.file_name, None),
            ("Uploaded At", _iso(result.uploaded_at), None),
            ("Total Items", summary.total_count, None),
            ("Avg Flowrate", summary.average_flowrate, "m3/h"),
            ("Avg Pressure", summary.average_pressure, "bar"),
            ("Avg Temperature", summary.average_temperature, "C"),
        )
        return [
            {"metric": metric, "value": value, "unit": unit}
            for metric, value, unit in figures
        ]

    def _export_distribution(self, result: AnalysisResult) -> list[dict[str, Any]]:
        return [
            {"type": name, "count": count}
            for name, count in result.summary.type_distribution.items()
        ]

    def _export_data(self, result: AnalysisResult) -> list[dict[str, Any]]:
        limit = self._data_rows or get_analysis_settings().export_data_rows
        return [
            {
                "name": row.equipment_name,
                "type": row.equipment_type,
                "flowrate": row.flowrate,
                "pressure": row.pressure,
                "temperature": row.temperature,
            }
            for row in result.rows[:limit]
        ]

    def _export_anomalies(self, result: AnalysisResult) -> list[dict[str, Any]]:
        return [
            {
                "row_id": finding.row_id,
                "name": finding.equipment_name,
                "type": finding.equipment_type,
                "flowrate": finding.flowrate,
                "pressure": finding.pressure,
                "temperature": finding.temperature,
                "reasons": "; ".join(finding.reasons),
                "score": finding.score,
            }
            for finding in result.anomalies.anomalies
        ]

    def _export_health(self, result: AnalysisResult) -> list[dict[str, Any]]:
        return [
            {"name": item.equipment_name, "score": item.score}
            for item in result.health_scores
        ]

    def _export_forecast(self, result: AnalysisResult) -> list[dict[str, Any]]:
        forecast = result.forecast
        return [
            {
                "horizon": label,
                "flowrate": flow,
                "pressure": pressure,
                "temperature": temperature,
            }
            for label, flow, pressure, temperature in zip(
                forecast.labels,
                forecast.flowrate_future,
                forecast.pressure_future,
                forecast.temperature_future,
            )
        ]

    def _export_quality(self, result: AnalysisResult) -> list[dict[str, Any]]:
        quality = result.quality
        rows: list[dict[str, Any]] = [
            {"metric": "Quality Score", "value": quality.score},
            {"metric": "Missing Values", "value": quality.missing_values},
            {"metric": "Negative Values", "value": quality.negative_values},
            {"metric": "Duplicates", "value": quality.duplicates},
        ]
        rows.extend({"metric": "Finding", "value": issue} for issue in quality.issues)
        return rows


# ---------------------------------------------------------------------------
# Singleton factory
# ---------------------------------------------------------------------------


_service: ReportExportService | None = None


def get_report_export_service() -> ReportExportService:
    global _service
    if _service is None:
        _service = ReportExportService()
    return _service
