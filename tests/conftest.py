"""
tests/conftest.py

Shared fixtures: an EquipmentRow factory with fixed timestamps.
"""

from __future__ import annotations

from datetime import datetime, timezone
from itertools import count

import pytest

from app.domain.equipment import EquipmentRow

FIXED_TS = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def make_row():
    """Return a factory building EquipmentRow values with sequential ids."""
    ids = count(1)

    def _make(
        name: str | None = None,
        equipment_type: str = "Pump",
        flowrate: float = 100.0,
        pressure: float = 40.0,
        temperature: float = 60.0,
        *,
        uploaded_at: datetime = FIXED_TS,
    ) -> EquipmentRow:
        index = next(ids)
        return EquipmentRow(
            id=f"eq-test-{index}",
            equipment_name=name if name is not None else f"Eq-{index}",
            equipment_type=equipment_type,
            flowrate=flowrate,
            pressure=pressure,
            temperature=temperature,
            uploaded_at=uploaded_at,
        )

    return _make
