"""
app/services/record_parser.py

Turns raw delimited text into typed equipment rows.

The first non-empty line is the header. Each following non-empty line is
split into positional fields aligned with the header; lines with fewer than
five fields are dropped. Numeric fields that fail to parse become 0.0 and
missing descriptive fields get placeholders, so a malformed value never
rejects its row.

An empty input is a valid result with zero rows. Only text that cannot be
read as a delimited dataset at all raises InvalidInputError.
"""

from __future__ import annotations

import csv
import logging
import uuid
from datetime import datetime, timezone
from typing import Sequence

from app.domain.equipment import EquipmentRow, InvalidInputError, ParsedBatch, RowIssue
from app.mappers.header_mapper import HeaderMapper, HeaderResolution
from app.validators.field_coercer import FieldCoercer

logger = logging.getLogger(__name__)

MIN_FIELDS_PER_ROW: int = 5
UNKNOWN_TYPE: str = "Unknown"


class RecordParser:
    """
    Parses equipment CSV text into a ParsedBatch.
    """

    def __init__(
        self,
        *,
        header_mapper: HeaderMapper | None = None,
        coercer: FieldCoercer | None = None,
    ) -> None:
        self._header_mapper = header_mapper or HeaderMapper()
        self._coercer = coercer or FieldCoercer()

    def parse(
        self,
        text: str,
        *,
        uploaded_at: datetime | None = None,
        batch_token: str | None = None,
    ) -> ParsedBatch:
        """
        Parse *text* into rows sharing one ingestion timestamp.

        Args:
            text:         Raw delimited text with a header line.
            uploaded_at:  Ingestion timestamp applied to every row. Defaults
                          to the current UTC time.
            batch_token:  Token embedded in row identifiers. Defaults to a
                          short random hex string.

        Raises:
            InvalidInputError: if the header maps none of the known columns
                or the text cannot be tokenized.
        """

        lines = [line for line in text.splitlines() if line.strip()]
        if not lines:
            return ParsedBatch(rows=())

        timestamp = uploaded_at or datetime.now(tz=timezone.utc)
        token = batch_token or uuid.uuid4().hex[:8]

        try:
            records = list(csv.reader(lines, skipinitialspace=True))
        except csv.Error as exc:
            raise InvalidInputError(f"Invalid CSV format: {exc}") from exc

        resolution = self._header_mapper.resolve(records[0])
        if resolution.is_empty:
            raise InvalidInputError(
                "Header row does not contain any known equipment column "
                "(equipment_name, equipment_type, flowrate, pressure, temperature)."
            )

        rows: list[EquipmentRow] = []
        issues: list[RowIssue] = []
        rows_dropped = 0

        for index, fields in enumerate(records[1:], start=1):
            if len(fields) < MIN_FIELDS_PER_ROW:
                rows_dropped += 1
                issues.append(
                    RowIssue(
                        row_number=index,
                        message=(
                            f"Row has {len(fields)} fields; at least "
                            f"{MIN_FIELDS_PER_ROW} are required."
                        ),
                    )
                )
                logger.debug("Dropped malformed row %d with %d fields", index, len(fields))
                continue

            rows.append(
                self._build_row(
                    fields=fields,
                    index=index,
                    resolution=resolution,
                    token=token,
                    uploaded_at=timestamp,
                    issues=issues,
                )
            )

        logger.debug(
            "Parsed %d rows (%d dropped, %d issues) batch=%s",
            len(rows),
            rows_dropped,
            len(issues),
            token,
        )
        return ParsedBatch(rows=tuple(rows), rows_dropped=rows_dropped, issues=tuple(issues))

    def _build_row(
        self,
        *,
        fields: Sequence[str],
        index: int,
        resolution: HeaderResolution,
        token: str,
        uploaded_at: datetime,
        issues: list[RowIssue],
    ) -> EquipmentRow:
        def cell(key: str) -> str | None:
            position = resolution.index_of(key)
            if position is None or position >= len(fields):
                return None
            return fields[position]

        def number(key: str, column: str) -> float:
            return self._coercer.parse_number(
                value=cell(key),
                row_number=index,
                column=column,
                issues=issues,
            )

        return EquipmentRow(
            id=f"eq-{token}-{index}",
            equipment_name=self._coercer.parse_label(cell("name"), default=f"Eq-{index}"),
            equipment_type=self._coercer.parse_label(cell("type"), default=UNKNOWN_TYPE),
            flowrate=number("flow", "flowrate"),
            pressure=number("pressure", "pressure"),
            temperature=number("temperature", "temperature"),
            uploaded_at=uploaded_at,
        )


def parse_equipment_csv(text: str, **kwargs) -> tuple[EquipmentRow, ...]:
    """
    Convenience wrapper returning only the parsed rows.
    """

    return RecordParser().parse(text, **kwargs).rows
