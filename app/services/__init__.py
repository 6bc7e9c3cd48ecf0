"""
app/services package marker.
"""

from app.services.analysis_pipeline import AnalysisPipeline, get_analysis_pipeline
from app.services.narrative_service import NarrativeService, get_narrative_service
from app.services.record_parser import RecordParser, parse_equipment_csv
from app.services.report_export_service import ReportExportService, get_report_export_service
from app.services.summary_service import SummaryAggregator

__all__ = [
    "AnalysisPipeline",
    "get_analysis_pipeline",
    "NarrativeService",
    "get_narrative_service",
    "RecordParser",
    "parse_equipment_csv",
    "ReportExportService",
    "get_report_export_service",
    "SummaryAggregator",
]
