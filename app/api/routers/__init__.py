"""
app/api/routers package marker.
"""

from app.api.routers.analysis_router import router as analysis_router
from app.api.routers.history_router import router as history_router
from app.api.routers.monitor_router import router as monitor_router

__all__ = [
    "analysis_router",
    "history_router",
    "monitor_router",
]
