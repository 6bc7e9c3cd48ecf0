"""
quality/auditor.py

Data-quality audit over one batch.

Counts
------
missing    rows whose equipment name is blank or whose flowrate is not finite
negative   rows with a negative pressure or flowrate
duplicates rows repeating an earlier (equipment_name, uploaded_at) pair

score = clamp(100 - 2 * (missing + negative + duplicates), 0, 100)
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Sequence

from app.domain.equipment import EquipmentRow, QualityReport

NO_ISSUES_MESSAGE = "Data quality is excellent."


class DataQualityAuditor:
    """
    Stateless data-quality audit.
    """

    PENALTY_PER_ISSUE: int = 2
    MAX_SCORE: int = 100

    def audit(self, rows: Sequence[EquipmentRow]) -> QualityReport:
        missing = 0
        negative = 0
        duplicates = 0
        seen: set[tuple[str, datetime]] = set()

        for row in rows:
            if not row.equipment_name.strip() or not math.isfinite(row.flowrate):
                missing += 1
            if row.pressure < 0 or row.flowrate < 0:
                negative += 1

            key = (row.equipment_name, row.uploaded_at)
            if key in seen:
                duplicates += 1
            seen.add(key)

        total_issues = missing + negative + duplicates
        score = max(0, min(self.MAX_SCORE, self.MAX_SCORE - total_issues * self.PENALTY_PER_ISSUE))

        issues: list[str] = []
        if missing > 0:
            issues.append(f"{missing} rows have missing critical values.")
        if negative > 0:
            issues.append(f"{negative} rows contain physically impossible negative values.")
        if duplicates > 0:
            issues.append(f"{duplicates} duplicate entries detected.")
        if not issues:
            issues.append(NO_ISSUES_MESSAGE)

        return QualityReport(
            score=score,
            missing_values=missing,
            negative_values=negative,
            duplicates=duplicates,
            issues=tuple(issues),
        )
