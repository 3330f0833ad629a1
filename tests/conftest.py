"""
Pytest fixtures for BrestTrans tests.

Provides common test fixtures including:
- A small stop directory and its JSON asset
- Sample transport records
- A weather client stub with a fixed answer
"""

import json

import pytest

from bresttrans.core.models import StopEntry, TransportRecord
from bresttrans.core.stops import StopDirectory


STOP_ROWS = [
    {"name": "Вокзал", "moveto": "Площадь Ленина", "x": "23.6877", "y": "52.0976"},
    {"name": "Вокзал", "moveto": "Улица Пушкинская", "x": "23.6879", "y": "52.0974"},
    {"name": "Вокзал", "moveto": "Площадь Ленина", "x": "23.0000", "y": "52.0000"},
    {"name": "Площадь Ленина", "moveto": "Вокзал", "x": "23.6952", "y": "52.0935"},
    {"name": "Центральный рынок", "moveto": "Гоголя", "x": "23.7044", "y": "52.0901"},
]


@pytest.fixture
def stop_rows():
    """Raw asset rows."""
    return [dict(row) for row in STOP_ROWS]


@pytest.fixture
def stop_asset(tmp_path, stop_rows):
    """Stop directory asset written to a temporary file."""
    path = tmp_path / "stops.json"
    path.write_text(json.dumps(stop_rows, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def directory(stop_rows):
    """Stop directory built from the sample rows."""
    return StopDirectory([StopEntry.from_asset(row) for row in stop_rows])


@pytest.fixture
def single_stop_directory():
    """Directory with one stop A -> B at x=1, y=2."""
    return StopDirectory([StopEntry.from_asset({"name": "A", "moveto": "B", "x": "1", "y": "2"})])


def make_record(index: int = 1, **overrides) -> TransportRecord:
    """Build a complete record with distinguishable field values."""
    values = {
        "time": f"2024-05-0{index} 08:15:00",
        "vehicle_number": f"AB 123{index}-1",
        "route_number": str(10 + index),
        "type": "Автобус",
        "current_stop": "Вокзал",
        "next_stop": "Площадь Ленина",
        "people_at_stop": str(index),
        "people_in_transport": str(20 + index),
        "entered": "2",
        "exited": "3",
        "latitude": "52.0976",
        "longitude": "23.6877",
        "weather": "Ясно, 18.5°C",
    }
    values.update(overrides)
    return TransportRecord(**values)


@pytest.fixture
def record_factory():
    """Factory for complete records: record_factory(index, **overrides)."""
    return make_record


@pytest.fixture
def sample_record():
    return make_record(1)


@pytest.fixture
def sample_records():
    return [make_record(i) for i in range(1, 4)]


class StubWeather:
    """Weather client replacement that records calls."""

    def __init__(self, answer: str = "Облачно, 12.0°C"):
        self.answer = answer
        self.calls = []

    def fetch(self, latitude: str, longitude: str) -> str:
        self.calls.append((latitude, longitude))
        return self.answer


@pytest.fixture
def stub_weather():
    return StubWeather()
