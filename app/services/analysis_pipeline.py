"""
app/services/analysis_pipeline.py

Coordinates one batch through the analytics pipeline:

    parse → summarize → {detect, score, forecast, audit} → insights

The four post-summary analyzers are independent: each receives the same
immutable rows and summary and returns a new value object. Contains no
calculation logic of its own.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from typing import Sequence

from anomaly.base import BaseAnomalyDetector
from anomaly.detector import ZScoreAnomalyDetector
from app.domain.equipment import AnalysisResult, EquipmentRow, RowIssue
from app.services.record_parser import RecordParser
from app.services.summary_service import SummaryAggregator
from forecast.damped_slope import DampedSlopeForecast
from health.scoring import EquipmentHealthModel
from insights.generator import InsightGenerator
from quality.auditor import DataQualityAuditor

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "dataset.csv"


class AnalysisPipeline:
    """
    Thin coordinator that wires together the analytics components.

    Every call produces a fully independent AnalysisResult; the pipeline
    holds no per-batch state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        *,
        parser: RecordParser | None = None,
        aggregator: SummaryAggregator | None = None,
        detector: BaseAnomalyDetector | None = None,
        health_model: EquipmentHealthModel | None = None,
        forecaster: DampedSlopeForecast | None = None,
        auditor: DataQualityAuditor | None = None,
        insight_generator: InsightGenerator | None = None,
    ) -> None:
        self._parser = parser or RecordParser()
        self._aggregator = aggregator or SummaryAggregator()
        self._detector = detector or ZScoreAnomalyDetector()
        self._health_model = health_model or EquipmentHealthModel()
        self._forecaster = forecaster or DampedSlopeForecast()
        self._auditor = auditor or DataQualityAuditor()
        self._insight_generator = insight_generator or InsightGenerator()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def analyze(
        self,
        text: str,
        *,
        file_name: str = DEFAULT_FILE_NAME,
        uploaded_at: datetime | None = None,
    ) -> AnalysisResult:
        """
        Parse *text* and run every analyzer over the resulting rows.

        Raises:
            InvalidInputError: if the text has no usable header.
        """

        timestamp = uploaded_at or datetime.now(tz=timezone.utc)
        parsed = self._parser.parse(text, uploaded_at=timestamp)
        logger.info(
            "Parsed dataset file=%r rows=%d dropped=%d issues=%d",
            file_name,
            len(parsed.rows),
            parsed.rows_dropped,
            len(parsed.issues),
        )
        return self.analyze_rows(
            parsed.rows,
            file_name=file_name,
            uploaded_at=timestamp,
            parse_issues=parsed.issues,
        )

    def analyze_rows(
        self,
        rows: Sequence[EquipmentRow],
        *,
        file_name: str = DEFAULT_FILE_NAME,
        uploaded_at: datetime | None = None,
        parse_issues: Sequence[RowIssue] = (),
    ) -> AnalysisResult:
        """
        Run the post-parse stages over rows the caller already holds.
        """

        batch = tuple(rows)
        summary = self._aggregator.summarize(batch)
        logger.info(
            "Summary computed total=%d avg_flow=%s avg_pressure=%s avg_temperature=%s",
            summary.total_count,
            summary.average_flowrate,
            summary.average_pressure,
            summary.average_temperature,
        )

        anomalies = self._detector.detect(batch, summary)
        logger.info("Anomaly detection flagged %d of %d rows", anomalies.total_anomalies, len(batch))

        health_scores = self._health_model.score(batch, summary)
        if health_scores:
            logger.info(
                "Health scored rows=%d worst=%r score=%d",
                len(health_scores),
                health_scores[0].equipment_name,
                health_scores[0].score,
            )

        forecast = self._forecaster.project_rows(batch)
        quality = self._auditor.audit(batch)
        logger.info(
            "Quality audit score=%d missing=%d negative=%d duplicates=%d",
            quality.score,
            quality.missing_values,
            quality.negative_values,
            quality.duplicates,
        )

        insights = self._insight_generator.generate(batch, summary, anomalies)

        return AnalysisResult(
            id=f"ds-{uuid.uuid4().hex[:12]}",
            file_name=file_name,
            uploaded_at=uploaded_at or datetime.now(tz=timezone.utc),
            summary=summary,
            rows=batch,
            anomalies=anomalies,
            health_scores=health_scores,
            forecast=forecast,
            quality=quality,
            insights=insights,
            parse_issues=tuple(parse_issues),
        )


@lru_cache(maxsize=1)
def get_analysis_pipeline() -> AnalysisPipeline:
    """
    Return a cached pipeline instance; it holds no per-batch state.
    """

    return AnalysisPipeline()
