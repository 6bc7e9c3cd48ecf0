"""
app/repositories/history_repository.py

Recent-results store for analysed datasets.

The store keeps the newest results first and silently drops the oldest
entries once the capacity is exceeded. Nothing is written to disk.
"""

from __future__ import annotations

import threading
from functools import lru_cache
from typing import Protocol

from app.config import get_analysis_settings
from app.domain.equipment import AnalysisResult


class HistoryRepository(Protocol):
    """
    Persistence surface for AnalysisResult values.
    """

    def append(self, result: AnalysisResult) -> None:
        ...

    def list_recent(self) -> list[AnalysisResult]:
        ...

    def get(self, result_id: str) -> AnalysisResult | None:
        ...


class InMemoryHistoryRepository:
    """
    Capacity-capped, newest-first history held in process memory.
    """

    def __init__(self, *, limit: int = 5) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1.")
        self._limit = limit
        self._entries: list[AnalysisResult] = []
        self._lock = threading.Lock()

    @property
    def limit(self) -> int:
        return self._limit

    def append(self, result: AnalysisResult) -> None:
        """
        Insert *result* at the front, trimming entries beyond the limit.
        """

        with self._lock:
            self._entries.insert(0, result)
            del self._entries[self._limit:]

    def list_recent(self) -> list[AnalysisResult]:
        with self._lock:
            return list(self._entries)

    def get(self, result_id: str) -> AnalysisResult | None:
        with self._lock:
            for entry in self._entries:
                if entry.id == result_id:
                    return entry
        return None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


@lru_cache(maxsize=1)
def get_history_repository() -> InMemoryHistoryRepository:
    """
    Return the process-wide history store sized from HISTORY_LIMIT.
    """

    return InMemoryHistoryRepository(limit=get_analysis_settings().history_limit)
