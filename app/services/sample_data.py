"""
app/services/sample_data.py

Reference dataset and synthetic live readings for demos and tests.
"""

from __future__ import annotations

import random
from datetime import datetime

SAMPLE_HEADER = "equipment_name,equipment_type,flowrate,pressure,temperature"

# Eight rows inside a narrow operating band plus one deliberate outlier.
SAMPLE_ROWS: tuple[str, ...] = (
    "Pump-A01,Pump,120.5,45.2,60.1",
    "Valve-X99,Valve,98.4,41.5,58.0",
    "Reactor-Main,Reactor,130.2,48.0,72.5",
    "HeatEx-B2,Heat Exchanger,110.1,43.4,66.2",
    "Tank-Storage,Tank,95.0,39.2,55.0",
    "Pump-A02,Pump,115.0,44.8,62.3",
    "Compressor-C1,Compressor,125.5,47.1,70.5",
    "Valve-Y10,Valve,101.3,40.2,57.5",
    "Pump-Error,Pump,900.0,5.0,300.0",
)

WARNING_PROBABILITY: float = 0.1


def generate_sample_csv() -> str:
    """
    Return the nine-row sample dataset as CSV text.
    """

    return "\n".join((SAMPLE_HEADER, *SAMPLE_ROWS))


def simulate_reading(rng: random.Random | None = None) -> dict[str, object]:
    """
    Generate one synthetic live telemetry reading.

    Values are uniform around a nominal operating point: flowrate 100±10,
    pressure 40±5, temperature 60±7.5. About one reading in ten carries a
    WARNING status.
    """

    source = rng or random.Random()
    return {
        "time": datetime.now().strftime("%H:%M:%S"),
        "flowrate": 100.0 + source.uniform(-10.0, 10.0),
        "pressure": 40.0 + source.uniform(-5.0, 5.0),
        "temperature": 60.0 + source.uniform(-7.5, 7.5),
        "status": "WARNING" if source.random() < WARNING_PROBABILITY else "OK",
    }
