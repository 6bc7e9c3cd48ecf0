"""
app/schemas/analysis.py

Response schemas for analysis, history and monitoring endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.equipment import AnalysisResult, EquipmentRow


class _ResponseModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class EquipmentRowResponse(_ResponseModel):
    """
    API response model for one parsed equipment row.
    """

    id: str
    equipment_name: str
    equipment_type: str
    flowrate: float
    pressure: float
    temperature: float
    uploaded_at: datetime

    @classmethod
    def from_domain(cls, row: EquipmentRow) -> "EquipmentRowResponse":
        return cls(
            id=row.id,
            equipment_name=row.equipment_name,
            equipment_type=row.equipment_type,
            flowrate=row.flowrate,
            pressure=row.pressure,
            temperature=row.temperature,
            uploaded_at=row.uploaded_at,
        )


class TypeDistributionResponse(_ResponseModel):
    name: str
    value: int = Field(..., ge=1)


class DatasetSummaryResponse(_ResponseModel):
    total_count: int = Field(..., ge=0)
    average_flowrate: float
    average_pressure: float
    average_temperature: float
    type_distribution: list[TypeDistributionResponse] = Field(default_factory=list)


class AnomalyFindingResponse(_ResponseModel):
    row_id: str
    equipment_name: str
    equipment_type: str
    flowrate: float
    pressure: float
    temperature: float
    reasons: list[str]
    score: float = Field(..., ge=0.0, le=1.0)


class AnomalyReportResponse(_ResponseModel):
    total_anomalies: int = Field(..., ge=0)
    rows_flagged: list[str] = Field(default_factory=list)
    anomalies: list[AnomalyFindingResponse] = Field(default_factory=list)


class HealthScoreResponse(_ResponseModel):
    equipment_name: str
    score: int = Field(..., ge=0, le=100)


class ForecastResponse(_ResponseModel):
    flowrate_future: list[float]
    pressure_future: list[float]
    temperature_future: list[float]
    labels: list[str]


class QualityReportResponse(_ResponseModel):
    score: int = Field(..., ge=0, le=100)
    missing_values: int = Field(..., ge=0)
    negative_values: int = Field(..., ge=0)
    duplicates: int = Field(..., ge=0)
    outliers: int = Field(..., ge=0)
    issues: list[str]


class ParseIssueResponse(_ResponseModel):
    """
    API response model for one parser diagnostic.
    """

    row_number: int = Field(..., ge=1)
    message: str
    column: str | None = None
    value: str | None = None


class AnalysisResultResponse(_ResponseModel):
    """
    API response model for a full analysed dataset.
    """

    id: str
    file_name: str
    uploaded_at: datetime
    summary: DatasetSummaryResponse
    data: list[EquipmentRowResponse]
    anomalies: AnomalyReportResponse
    health_scores: list[HealthScoreResponse]
    forecast: ForecastResponse
    data_quality: QualityReportResponse
    auto_insights: list[str]
    parse_issues: list[ParseIssueResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, result: AnalysisResult) -> "AnalysisResultResponse":
        summary = result.summary
        report = result.anomalies
        forecast = result.forecast
        quality = result.quality
        # rows_flagged lists flagged row ids in ingestion order.
        return cls(
            id=result.id,
            file_name=result.file_name,
            uploaded_at=result.uploaded_at,
            summary=DatasetSummaryResponse(
                total_count=summary.total_count,
                average_flowrate=summary.average_flowrate,
                average_pressure=summary.average_pressure,
                average_temperature=summary.average_temperature,
                type_distribution=[
                    TypeDistributionResponse(name=name, value=count)
                    for name, count in summary.type_distribution.items()
                ],
            ),
            data=[EquipmentRowResponse.from_domain(row) for row in result.rows],
            anomalies=AnomalyReportResponse(
                total_anomalies=report.total_anomalies,
                rows_flagged=[row.id for row in result.rows if row.id in report.rows_flagged],
                anomalies=[
                    AnomalyFindingResponse(
                        row_id=finding.row_id,
                        equipment_name=finding.equipment_name,
                        equipment_type=finding.equipment_type,
                        flowrate=finding.flowrate,
                        pressure=finding.pressure,
                        temperature=finding.temperature,
                        reasons=list(finding.reasons),
                        score=finding.score,
                    )
                    for finding in report.anomalies
                ],
            ),
            health_scores=[
                HealthScoreResponse(equipment_name=item.equipment_name, score=item.score)
                for item in result.health_scores
            ],
            forecast=ForecastResponse(
                flowrate_future=list(forecast.flowrate_future),
                pressure_future=list(forecast.pressure_future),
                temperature_future=list(forecast.temperature_future),
                labels=list(forecast.labels),
            ),
            data_quality=QualityReportResponse(
                score=quality.score,
                missing_values=quality.missing_values,
                negative_values=quality.negative_values,
                duplicates=quality.duplicates,
                outliers=quality.outliers,
                issues=list(quality.issues),
            ),
            auto_insights=list(result.insights),
            parse_issues=[
                ParseIssueResponse(
                    row_number=issue.row_number,
                    message=issue.message,
                    column=issue.column,
                    value=issue.value,
                )
                for issue in result.parse_issues
            ],
        )


class HistoryEntryResponse(_ResponseModel):
    """
    Light history listing entry.
    """

    id: str
    file_name: str
    uploaded_at: datetime
    total_count: int = Field(..., ge=0)

    @classmethod
    def from_domain(cls, result: AnalysisResult) -> "HistoryEntryResponse":
        return cls(
            id=result.id,
            file_name=result.file_name,
            uploaded_at=result.uploaded_at,
            total_count=result.summary.total_count,
        )


class NarrativeResponse(_ResponseModel):
    result_id: str
    narrative: str


class LiveReadingResponse(_ResponseModel):
    time: str
    flowrate: float
    pressure: float
    temperature: float
    status: str


class HealthCheckResponse(_ResponseModel):
    status: str
    version: str
