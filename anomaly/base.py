"""
anomaly/base.py

Abstract base class for anomaly detector implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from app.domain.equipment import AnomalyReport, DatasetSummary, EquipmentRow


class BaseAnomalyDetector(ABC):
    """
    Contract for anomaly detector implementations.

    Subclasses receive the full batch plus its precomputed summary and
    must return a new AnomalyReport. No I/O, no logging, and no side
    effects are permitted inside :meth:`detect`.
    """

    @abstractmethod
    def detect(
        self,
        rows: Sequence[EquipmentRow],
        summary: DatasetSummary,
    ) -> AnomalyReport:
        """
        Flag rows whose parameters deviate abnormally from the batch.

        Parameters
        ----------
        rows:
            Every row of the batch, in ingestion order.
        summary:
            Summary computed from the same rows; its means are the centre
            of the deviation test.

        Returns
        -------
        AnomalyReport
            Findings ordered by descending severity. Rows without any
            triggered parameter are omitted.
        """
