"""
Data structures for ridership observations and the stop directory.
"""

from dataclasses import astuple, dataclass, fields
from enum import Enum
from typing import Any

UNKNOWN_COORDINATE = "0.0"


class TransportType(Enum):
    """Vehicle categories a surveyor can pick from."""

    BUS = "Автобус"
    TROLLEYBUS = "Троллейбус"
    MINIBUS = "Маршрутка"
    ARTICULATED_BUS = "Сочленённый автобус"
    CHARTER_BUS = "Заказной автобус"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def labels(cls) -> list[str]:
        """Display labels in menu order."""
        return [member.value for member in cls]


DEFAULT_TRANSPORT_TYPE = TransportType.BUS.value


@dataclass(frozen=True)
class StopEntry:
    """
    One row of the stop directory.

    A stop appears once per allowed successor, so several entries can
    share the same name. Coordinates are kept as the strings found in
    the asset.
    """

    name: str
    next_stop_name: str
    longitude: str
    latitude: str

    @classmethod
    def from_asset(cls, item: dict[str, Any]) -> "StopEntry":
        """Build an entry from an asset row with keys name/moveto/x/y."""
        return cls(
            name=str(item["name"]),
            next_stop_name=str(item["moveto"]),
            longitude=str(item["x"]),
            latitude=str(item["y"]),
        )


@dataclass(frozen=True)
class TransportRecord:
    """
    A single ridership observation.

    Attributes:
        time: Local timestamp at save time, ``YYYY-MM-DD HH:MM:SS``
        vehicle_number: Registration number of the vehicle
        route_number: Route the vehicle was running
        type: One of the TransportType labels
        current_stop: Stop where the observation was made
        next_stop: Next stop on the route
        people_at_stop: Digit string, people waiting at the stop
        people_in_transport: Digit string, people on board
        entered: Digit string, people who boarded
        exited: Digit string, people who got off
        latitude: Stop latitude, or "0.0" when the stop is unknown
        longitude: Stop longitude, or "0.0" when the stop is unknown
        weather: Weather description or the lookup failure sentinel
    """

    time: str
    vehicle_number: str
    route_number: str
    type: str
    current_stop: str
    next_stop: str
    people_at_stop: str
    people_in_transport: str
    entered: str
    exited: str
    latitude: str
    longitude: str
    weather: str

    def as_row(self) -> tuple[str, ...]:
        """Field values in declaration order."""
        return astuple(self)

    def to_dict(self) -> dict[str, str]:
        """Convert to a plain dictionary keyed by field name."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @property
    def summary(self) -> str:
        """One-line description used by the history list."""
        return f"{self.time} — {self.vehicle_number} ({self.route_number}, {self.type})"
