"""
tests/test_record_parser.py

Pytest unit tests for RecordParser and header normalization.

All tests are pure Python: no I/O, inline CSV text only.

Coverage
--------
- Header normalization and alias resolution
- Positional alignment with reordered and unknown headers
- Numeric coercion of malformed and non-finite values
- Placeholder names and types
- Dropped short rows
- Empty input and invalid input
- Row identifiers and shared ingestion timestamp
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.domain.equipment import InvalidInputError
from app.mappers.header_mapper import HeaderMapper, normalize_header
from app.services.record_parser import RecordParser, parse_equipment_csv
from app.services.sample_data import generate_sample_csv

HEADER = "equipment_name,equipment_type,flowrate,pressure,temperature"
FIXED_TS = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def parser() -> RecordParser:
    """Fresh RecordParser instance for each test."""
    return RecordParser()


# ---------------------------------------------------------------------------
# Header normalization
# ---------------------------------------------------------------------------


class TestHeaderNormalization:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Equipment Name", "equipment_name"),
            ("  FLOWRATE ", "flowrate"),
            ("Equipment   Type", "equipment_type"),
            ("Temperature", "temperature"),
        ],
    )
    def test_normalize_header(self, raw: str, expected: str) -> None:
        assert normalize_header(raw) == expected

    def test_resolves_known_columns(self) -> None:
        resolution = HeaderMapper().resolve(HEADER.split(","))
        assert resolution.key_to_index == {
            "name": 0,
            "type": 1,
            "flow": 2,
            "pressure": 3,
            "temperature": 4,
        }

    def test_unknown_headers_keep_position_but_are_unmapped(self) -> None:
        resolution = HeaderMapper().resolve(["site", "equipment_name", "flowrate"])
        assert resolution.index_of("name") == 1
        assert resolution.index_of("flow") == 2
        assert resolution.normalized_headers[0] == "site"

    def test_first_matching_header_wins(self) -> None:
        resolution = HeaderMapper().resolve(["flowrate", "flow"])
        assert resolution.index_of("flow") == 0

    def test_custom_aliases(self) -> None:
        mapper = HeaderMapper(aliases={"name": ("asset",), "flow": ("q",)})
        resolution = mapper.resolve(["Asset", "Q"])
        assert resolution.key_to_index == {"name": 0, "flow": 1}

    def test_custom_aliases_reject_unknown_keys(self) -> None:
        with pytest.raises(ValueError, match="vibration"):
            HeaderMapper(aliases={"vibration": ("vib",)})


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParse:
    def test_sample_dataset_yields_nine_rows(self, parser: RecordParser) -> None:
        batch = parser.parse(generate_sample_csv())
        assert len(batch.rows) == 9
        first = batch.rows[0]
        assert first.equipment_name == "Pump-A01"
        assert first.equipment_type == "Pump"
        assert first.flowrate == pytest.approx(120.5)
        assert first.pressure == pytest.approx(45.2)
        assert first.temperature == pytest.approx(60.1)

    def test_case_and_whitespace_in_headers(self, parser: RecordParser) -> None:
        text = "Equipment Name, Equipment Type ,Flowrate,PRESSURE,Temperature\nP1,Pump,1,2,3"
        row = parser.parse(text).rows[0]
        assert row.equipment_name == "P1"
        assert row.equipment_type == "Pump"
        assert (row.flowrate, row.pressure, row.temperature) == (1.0, 2.0, 3.0)

    def test_reordered_headers_align_positionally(self, parser: RecordParser) -> None:
        text = "temperature,pressure,flowrate,equipment_type,equipment_name\n70,30,110,Valve,V1"
        row = parser.parse(text).rows[0]
        assert row.equipment_name == "V1"
        assert row.equipment_type == "Valve"
        assert row.flowrate == 110.0
        assert row.pressure == 30.0
        assert row.temperature == 70.0

    def test_extra_unknown_column_is_ignored(self, parser: RecordParser) -> None:
        text = "equipment_name,site,equipment_type,flowrate,pressure,temperature\nP1,North,Pump,1,2,3"
        row = parser.parse(text).rows[0]
        assert row.equipment_type == "Pump"
        assert row.temperature == 3.0

    def test_quoted_field_with_comma(self, parser: RecordParser) -> None:
        text = f'{HEADER}\n"Pump, Main",Pump,1,2,3'
        assert parser.parse(text).rows[0].equipment_name == "Pump, Main"

    def test_blank_lines_are_skipped(self, parser: RecordParser) -> None:
        text = f"\n\n{HEADER}\n\nP1,Pump,1,2,3\n   \nP2,Pump,4,5,6\n"
        batch = parser.parse(text)
        assert [row.equipment_name for row in batch.rows] == ["P1", "P2"]

    def test_windows_line_endings(self, parser: RecordParser) -> None:
        text = f"{HEADER}\r\nP1,Pump,1,2,3\r\n"
        row = parser.parse(text).rows[0]
        assert row.temperature == 3.0


class TestNumericCoercion:
    def test_unparsable_number_becomes_zero(self, parser: RecordParser) -> None:
        batch = parser.parse(f"{HEADER}\nP1,Pump,abc,2,3")
        assert batch.rows[0].flowrate == 0.0
        assert batch.rows[0].pressure == 2.0

    def test_unparsable_number_records_issue(self, parser: RecordParser) -> None:
        batch = parser.parse(f"{HEADER}\nP1,Pump,abc,2,3")
        assert len(batch.issues) == 1
        issue = batch.issues[0]
        assert issue.column == "flowrate"
        assert issue.value == "abc"
        assert issue.row_number == 1

    @pytest.mark.parametrize("raw", ["nan", "NaN", "inf", "-inf", "1e999999"])
    def test_non_finite_values_become_zero(self, parser: RecordParser, raw: str) -> None:
        row = parser.parse(f"{HEADER}\nP1,Pump,1,{raw},3").rows[0]
        assert row.pressure == 0.0

    def test_blank_number_becomes_zero(self, parser: RecordParser) -> None:
        row = parser.parse(f"{HEADER}\nP1,Pump,1,2,").rows[0]
        assert row.temperature == 0.0

    def test_negative_and_scientific_numbers_parse(self, parser: RecordParser) -> None:
        row = parser.parse(f"{HEADER}\nP1,Pump,-4.5,1e2,0.25").rows[0]
        assert row.flowrate == -4.5
        assert row.pressure == 100.0
        assert row.temperature == 0.25


class TestPlaceholders:
    def test_missing_name_uses_index_placeholder(self, parser: RecordParser) -> None:
        batch = parser.parse(f"{HEADER}\nP1,Pump,1,2,3\n,Pump,1,2,3")
        assert batch.rows[1].equipment_name == "Eq-2"

    def test_missing_type_defaults_to_unknown(self, parser: RecordParser) -> None:
        row = parser.parse(f"{HEADER}\nP1,  ,1,2,3").rows[0]
        assert row.equipment_type == "Unknown"

    def test_header_without_name_column(self, parser: RecordParser) -> None:
        text = "equipment_type,flowrate,pressure,temperature,notes\nPump,1,2,3,x"
        row = parser.parse(text).rows[0]
        assert row.equipment_name == "Eq-1"
        assert row.flowrate == 1.0


class TestDroppedRows:
    def test_short_row_is_dropped(self, parser: RecordParser) -> None:
        batch = parser.parse(f"{HEADER}\nP1,Pump,1,2\nP2,Pump,1,2,3")
        assert [row.equipment_name for row in batch.rows] == ["P2"]
        assert batch.rows_dropped == 1

    def test_dropped_row_is_reported(self, parser: RecordParser) -> None:
        batch = parser.parse(f"{HEADER}\nP1,Pump")
        assert batch.rows == ()
        assert batch.issues[0].row_number == 1
        assert "at least 5" in batch.issues[0].message


class TestEmptyAndInvalidInput:
    @pytest.mark.parametrize("text", ["", "   ", "\n\n", " \r\n \n"])
    def test_empty_text_is_valid_with_zero_rows(self, parser: RecordParser, text: str) -> None:
        batch = parser.parse(text)
        assert batch.rows == ()
        assert batch.rows_dropped == 0

    def test_header_only_yields_zero_rows(self, parser: RecordParser) -> None:
        assert parser.parse(HEADER).rows == ()

    def test_unstructured_text_raises(self, parser: RecordParser) -> None:
        with pytest.raises(InvalidInputError):
            parser.parse("hello world\nthis is not a dataset")

    def test_invalid_input_is_a_value_error(self, parser: RecordParser) -> None:
        with pytest.raises(ValueError):
            parser.parse("a,b,c,d,e\n1,2,3,4,5")


class TestIdentifiersAndTimestamps:
    def test_row_ids_are_unique_and_tokenized(self, parser: RecordParser) -> None:
        batch = parser.parse(f"{HEADER}\nP1,Pump,1,2,3\nP1,Pump,1,2,3", batch_token="tok")
        assert [row.id for row in batch.rows] == ["eq-tok-1", "eq-tok-2"]

    def test_rows_share_injected_timestamp(self, parser: RecordParser) -> None:
        batch = parser.parse(f"{HEADER}\nP1,Pump,1,2,3\nP2,Pump,1,2,3", uploaded_at=FIXED_TS)
        assert {row.uploaded_at for row in batch.rows} == {FIXED_TS}

    def test_default_timestamp_is_utc(self, parser: RecordParser) -> None:
        row = parser.parse(f"{HEADER}\nP1,Pump,1,2,3").rows[0]
        assert row.uploaded_at.tzinfo is not None

    def test_random_tokens_differ_between_calls(self, parser: RecordParser) -> None:
        text = f"{HEADER}\nP1,Pump,1,2,3"
        assert parser.parse(text).rows[0].id != parser.parse(text).rows[0].id


def test_parse_equipment_csv_returns_rows_only() -> None:
    rows = parse_equipment_csv(f"{HEADER}\nP1,Pump,1,2,3")
    assert isinstance(rows, tuple)
    assert rows[0].equipment_name == "P1"
