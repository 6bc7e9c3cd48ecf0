"""
app/validators/field_coercer.py

Field-level parsing for equipment rows.

Malformed values never reject a row: numeric fields fall back to 0.0 and
descriptive fields fall back to a caller-supplied placeholder. Every
numeric fallback is recorded as a RowIssue.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any

from app.domain.equipment import RowIssue

NUMERIC_FALLBACK: float = 0.0


class FieldCoercer:
    """
    Parses raw CSV cell values into typed equipment fields.
    """

    def parse_number(
        self,
        *,
        value: Any,
        row_number: int,
        column: str,
        issues: list[RowIssue],
    ) -> float:
        """
        Parse a finite float, substituting 0.0 for blank or malformed input.
        """

        if self._is_blank(value):
            issues.append(
                RowIssue(
                    row_number=row_number,
                    column=column,
                    message="Numeric value is missing; coerced to 0.",
                    value=self._stringify_value(value),
                )
            )
            return NUMERIC_FALLBACK

        raw_value = str(value).strip()
        try:
            parsed = float(Decimal(raw_value))
        except (InvalidOperation, ValueError, OverflowError):
            parsed = None

        if parsed is None or not math.isfinite(parsed):
            issues.append(
                RowIssue(
                    row_number=row_number,
                    column=column,
                    message="Numeric value could not be parsed; coerced to 0.",
                    value=raw_value,
                )
            )
            return NUMERIC_FALLBACK

        return parsed

    def parse_label(self, value: Any, *, default: str) -> str:
        if self._is_blank(value):
            return default
        return str(value).strip()

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        return str(value).strip() == ""

    @staticmethod
    def _stringify_value(value: Any) -> str | None:
        if value is None:
            return None
        return str(value)
