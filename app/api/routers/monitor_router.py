"""
app/api/routers/monitor_router.py

Synthetic live telemetry feed for dashboard polling.
"""

from __future__ import annotations

from fastapi import APIRouter

from app.schemas.analysis import LiveReadingResponse
from app.services.sample_data import simulate_reading

router = APIRouter(prefix="/monitor", tags=["monitor"])


@router.get("/reading", response_model=LiveReadingResponse)
def live_reading() -> LiveReadingResponse:
    return LiveReadingResponse(**simulate_reading())
