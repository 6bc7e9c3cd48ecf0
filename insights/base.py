"""
insights/base.py

Abstract base class for insight rule implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from app.domain.equipment import AnomalyReport, DatasetSummary, EquipmentRow


class BaseInsightRule(ABC):
    """
    Contract for one natural-language observation.

    A rule inspects the batch and either returns one sentence or ``None``
    when its condition does not hold. No I/O, no logging, and no side
    effects are permitted inside :meth:`evaluate`.
    """

    @abstractmethod
    def evaluate(
        self,
        rows: Sequence[EquipmentRow],
        summary: DatasetSummary,
        anomalies: AnomalyReport,
    ) -> str | None:
        """
        Return the rule's sentence, or ``None`` when it does not apply.
        """
