"""
tests/test_analysis_pipeline.py

Pytest tests for AnalysisPipeline end-to-end over inline CSV text.

Coverage
--------
- Reference sample dataset: summary, one anomaly, health, insights
- Empty input and invalid input
- Injected timestamp and parse diagnostics
- Result immutability and independence between calls
"""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone

import pytest

from app.domain.equipment import InvalidInputError
from app.services.analysis_pipeline import AnalysisPipeline, get_analysis_pipeline
from app.services.sample_data import generate_sample_csv

HEADER = "equipment_name,equipment_type,flowrate,pressure,temperature"
FIXED_TS = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def pipeline() -> AnalysisPipeline:
    return AnalysisPipeline()


class TestSampleDataset:
    @pytest.fixture()
    def result(self, pipeline: AnalysisPipeline):
        return pipeline.analyze(generate_sample_csv(), file_name="sample.csv", uploaded_at=FIXED_TS)

    def test_summary(self, result) -> None:
        summary = result.summary
        assert summary.total_count == 9
        assert summary.average_flowrate == pytest.approx(199.56)
        assert summary.average_pressure == pytest.approx(39.38)
        assert summary.average_temperature == pytest.approx(89.12)
        assert list(summary.type_distribution.items()) == [
            ("Pump", 3),
            ("Valve", 2),
            ("Reactor", 1),
            ("Heat Exchanger", 1),
            ("Tank", 1),
            ("Compressor", 1),
        ]

    def test_exactly_one_anomaly(self, result) -> None:
        assert result.anomalies.total_anomalies == 1
        finding = result.anomalies.anomalies[0]
        assert finding.equipment_name == "Pump-Error"
        assert finding.score == pytest.approx(1.0)

    def test_worst_health_first(self, result) -> None:
        assert len(result.health_scores) == 9
        assert result.health_scores[0].equipment_name == "Pump-Error"
        assert result.health_scores[0].score == 0
        scores = [item.score for item in result.health_scores]
        assert scores == sorted(scores)

    def test_quality_is_clean(self, result) -> None:
        assert result.quality.score == 100
        assert result.quality.issues == ("Data quality is excellent.",)

    def test_insights(self, result) -> None:
        assert result.insights == (
            "Anomaly Alert: 11.1% of equipment showed abnormal operational parameters.",
            "Pumps are driving system flow, averaging 378.5 m³/h (higher than global average).",
        )

    def test_forecast_follows_last_rows(self, result) -> None:
        # Last two flowrates are 101.3 then 900.0.
        assert result.forecast.flowrate_future[0] == pytest.approx(1299.35)

    def test_metadata(self, result) -> None:
        assert result.file_name == "sample.csv"
        assert result.uploaded_at == FIXED_TS
        assert result.id.startswith("ds-")
        assert {row.uploaded_at for row in result.rows} == {FIXED_TS}


class TestEmptyAndInvalid:
    def test_empty_text(self, pipeline: AnalysisPipeline) -> None:
        result = pipeline.analyze("")
        assert result.summary.total_count == 0
        assert result.anomalies.total_anomalies == 0
        assert result.health_scores == ()
        assert result.insights == ()
        assert result.forecast.flowrate_future == (0.0,) * 5
        assert result.quality.score == 100
        assert result.quality.issues == ("Data quality is excellent.",)

    def test_header_only(self, pipeline: AnalysisPipeline) -> None:
        assert pipeline.analyze(HEADER).summary.total_count == 0

    def test_invalid_text_raises(self, pipeline: AnalysisPipeline) -> None:
        with pytest.raises(InvalidInputError):
            pipeline.analyze("just some prose\nwithout any columns")


class TestDiagnostics:
    def test_parse_issues_are_carried(self, pipeline: AnalysisPipeline) -> None:
        result = pipeline.analyze(f"{HEADER}\nP1,Pump,oops,2,3\nP2,Pump")
        assert result.summary.total_count == 1
        assert [issue.row_number for issue in result.parse_issues] == [1, 2]

    def test_repeated_names_are_duplicates(self, pipeline: AnalysisPipeline) -> None:
        result = pipeline.analyze(f"{HEADER}\nP1,Pump,1,2,3\nP1,Pump,1,2,3")
        assert result.quality.duplicates == 1
        assert result.quality.score == 98

    def test_analyze_rows_directly(self, pipeline: AnalysisPipeline, make_row) -> None:
        result = pipeline.analyze_rows([make_row(), make_row()], file_name="rows.csv")
        assert result.summary.total_count == 2
        assert result.parse_issues == ()


class TestImmutability:
    def test_result_is_frozen(self, pipeline: AnalysisPipeline) -> None:
        result = pipeline.analyze(generate_sample_csv())
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.file_name = "other.csv"  # type: ignore[misc]

    def test_calls_are_independent(self, pipeline: AnalysisPipeline) -> None:
        first = pipeline.analyze(generate_sample_csv())
        second = pipeline.analyze(f"{HEADER}\nP1,Pump,1,2,3")
        assert first.id != second.id
        assert first.summary.total_count == 9
        assert second.summary.total_count == 1


def test_cached_pipeline_is_shared() -> None:
    assert get_analysis_pipeline() is get_analysis_pipeline()
