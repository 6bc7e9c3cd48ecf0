"""
app/api/routers/history_router.py

History, narrative and export endpoints for previously analysed datasets.

GET  /history                          recent results, newest first
GET  /history/{result_id}              full result
POST /history/{result_id}/narrative    LLM commentary (fallback text on failure)
GET  /history/{result_id}/export       flattened report section

Export query parameters
-----------------------
section : "summary" | "distribution" | "data" | "anomalies" | "health"
          | "forecast" | "quality"                     (default: "summary")
format  : "csv" | "json"                               (default: "csv")

All transformation logic lives in ReportExportService; the router only
handles HTTP plumbing (serialisation, content-type, error mapping).
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterator

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, StreamingResponse

from app.domain.equipment import AnalysisResult
from app.repositories.history_repository import HistoryRepository, get_history_repository
from app.schemas.analysis import AnalysisResultResponse, HistoryEntryResponse, NarrativeResponse
from app.services.narrative_service import NarrativeService, get_narrative_service
from app.services.report_export_service import (
    VALID_SECTIONS,
    ExportResult,
    ReportExportService,
    get_report_export_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/history", tags=["history"])

_VALID_FORMATS = frozenset({"csv", "json"})


# ---------------------------------------------------------------------------
# Serialisation helpers (no business logic)
# ---------------------------------------------------------------------------


def _to_csv_streaming(result: ExportResult, filename: str) -> StreamingResponse:
    """Stream *result* as a UTF-8 CSV file download."""

    def _generate() -> Iterator[str]:
        buf = io.StringIO()
        writer = csv.DictWriter(
            buf,
            fieldnames=result.fields,
            extrasaction="ignore",
            restval="",
            lineterminator="\r\n",
        )
        writer.writeheader()
        yield buf.getvalue()

        for row in result.rows:
            buf.seek(0)
            buf.truncate(0)
            clean = {k: ("" if v is None else v) for k, v in row.items()}
            writer.writerow(clean)
            yield buf.getvalue()

    return StreamingResponse(
        content=_generate(),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Row-Count": str(len(result.rows)),
        },
    )


def _to_json_response(result: ExportResult, section: str) -> JSONResponse:
    """Return *result* as a structured JSON response."""
    return JSONResponse(
        content={
            "section": section,
            "rows": len(result.rows),
            "fields": result.fields,
            "data": result.rows,
        }
    )


def _require_result(history: HistoryRepository, result_id: str) -> AnalysisResult:
    result = history.get(result_id)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Analysis result {result_id!r} not found.",
        )
    return result


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("", response_model=list[HistoryEntryResponse])
def list_history(
    history: HistoryRepository = Depends(get_history_repository),
) -> list[HistoryEntryResponse]:
    """
    List the most recent analysed datasets, newest first.
    """

    return [HistoryEntryResponse.from_domain(result) for result in history.list_recent()]


@router.get("/{result_id}", response_model=AnalysisResultResponse)
def get_history_entry(
    result_id: str,
    history: HistoryRepository = Depends(get_history_repository),
) -> AnalysisResultResponse:
    return AnalysisResultResponse.from_domain(_require_result(history, result_id))


@router.post("/{result_id}/narrative", response_model=NarrativeResponse)
def generate_narrative(
    result_id: str,
    history: HistoryRepository = Depends(get_history_repository),
    narrative_service: NarrativeService = Depends(get_narrative_service),
) -> NarrativeResponse:
    """
    Generate free-text commentary for a stored result.
    """

    result = _require_result(history, result_id)
    return NarrativeResponse(result_id=result.id, narrative=narrative_service.generate(result))


@router.get("/{result_id}/export", summary="Export one report section", response_model=None)
def export_history_entry(
    result_id: str,
    section: str = Query(
        default="summary",
        description="Report section to export.",
    ),
    output_format: str = Query(
        default="csv",
        alias="format",
        description='Output format: "csv" (file download) or "json".',
    ),
    history: HistoryRepository = Depends(get_history_repository),
    service: ReportExportService = Depends(get_report_export_service),
) -> StreamingResponse | JSONResponse:
    # --- Validate query params ---
    if section not in VALID_SECTIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid section {section!r}. Must be one of: {sorted(VALID_SECTIONS)}.",
        )
    if output_format not in _VALID_FORMATS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid format {output_format!r}. Must be one of: {sorted(_VALID_FORMATS)}.",
        )

    result = _require_result(history, result_id)
    exported = service.export(result, section=section)
    logger.info(
        "Report export result_id=%s section=%r format=%r rows=%d",
        result.id,
        section,
        output_format,
        len(exported.rows),
    )

    # --- Serialise ---
    if output_format == "csv":
        return _to_csv_streaming(exported, f"{result.id}_{section}.csv")
    return _to_json_response(exported, section)
