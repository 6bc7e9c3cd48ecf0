"""
app/schemas package marker.
"""

from app.schemas.analysis import (
    AnalysisResultResponse,
    HistoryEntryResponse,
    LiveReadingResponse,
    NarrativeResponse,
)

__all__ = [
    "AnalysisResultResponse",
    "HistoryEntryResponse",
    "LiveReadingResponse",
    "NarrativeResponse",
]
