"""
app/repositories package marker.
"""

from app.repositories.history_repository import (
    HistoryRepository,
    InMemoryHistoryRepository,
    get_history_repository,
)

__all__ = [
    "HistoryRepository",
    "InMemoryHistoryRepository",
    "get_history_repository",
]
