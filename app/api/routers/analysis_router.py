"""
app/api/routers/analysis_router.py

Dataset analysis HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from fastapi.responses import PlainTextResponse

from app.api.dependencies import get_csv_upload, read_upload_text
from app.config import AnalysisSettings, get_analysis_settings
from app.domain.equipment import InvalidInputError
from app.repositories.history_repository import HistoryRepository, get_history_repository
from app.schemas.analysis import AnalysisResultResponse
from app.services.analysis_pipeline import AnalysisPipeline, get_analysis_pipeline
from app.services.sample_data import generate_sample_csv

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


@router.post("/analyze", response_model=AnalysisResultResponse)
def analyze_csv(
    file: UploadFile = Depends(get_csv_upload),
    pipeline: AnalysisPipeline = Depends(get_analysis_pipeline),
    history: HistoryRepository = Depends(get_history_repository),
    settings: AnalysisSettings = Depends(get_analysis_settings),
) -> AnalysisResultResponse:
    """
    Analyse one uploaded equipment CSV and record it in the history.
    """

    try:
        text = read_upload_text(file, max_bytes=settings.max_upload_bytes)
    finally:
        file.file.close()

    try:
        result = pipeline.analyze(text, file_name=file.filename or "dataset.csv")
    except InvalidInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    if result.summary.total_count == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid equipment rows found.",
        )

    history.append(result)
    logger.info("Stored analysis result_id=%s file=%r", result.id, result.file_name)
    return AnalysisResultResponse.from_domain(result)


@router.get("/sample-csv", response_class=PlainTextResponse)
def sample_csv() -> PlainTextResponse:
    """
    Download the reference sample dataset.
    """

    return PlainTextResponse(
        content=generate_sample_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=sample_equipment.csv"},
    )
