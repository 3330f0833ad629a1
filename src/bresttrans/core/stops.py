"""
Stop directory loaded from the bundled JSON asset.

The asset is a list of ``{"name", "moveto", "x", "y"}`` rows, one per
(stop, next stop) pair, where x is the longitude and y the latitude.
"""

import json
import logging
from pathlib import Path

from .models import UNKNOWN_COORDINATE, StopEntry

logger = logging.getLogger(__name__)

DEFAULT_ASSET = Path(__file__).parent.parent / "assets" / "stops_with_next.json"


def load_stops(path: str | Path | None = None) -> list[StopEntry]:
    """
    Read stop entries from a JSON asset.

    Any read or parse failure yields an empty list; the caller then simply
    gets no suggestions and zero coordinates.

    Args:
        path: Asset path. Defaults to the asset shipped with the package.

    Returns:
        Stop entries in file order.
    """
    asset_path = Path(path) if path else DEFAULT_ASSET
    try:
        with open(asset_path, encoding="utf-8") as f:
            items = json.load(f)
        entries = [StopEntry.from_asset(item) for item in items]
    except Exception as e:
        logger.debug(f"Stop directory unavailable ({asset_path}): {e}")
        return []

    logger.info(f"Loaded {len(entries)} stop entries from {asset_path}")
    return entries


class StopDirectory:
    """Read-only lookups over the loaded stop entries."""

    def __init__(self, entries: list[StopEntry] | None = None):
        self._entries: tuple[StopEntry, ...] = tuple(entries or ())

    @classmethod
    def load(cls, path: str | Path | None = None) -> "StopDirectory":
        """Create a directory from an asset file."""
        return cls(load_stops(path))

    @property
    def entries(self) -> tuple[StopEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def distinct_stop_names(self) -> set[str]:
        """Names usable as the current stop."""
        return {entry.name for entry in self._entries}

    def ordered_stop_names(self) -> list[str]:
        """Distinct stop names in asset order, for suggestion lists."""
        return list(dict.fromkeys(entry.name for entry in self._entries))

    def next_stops_for(self, stop_name: str) -> set[str]:
        """Allowed next stops for a stop; empty for unknown names."""
        return {
            entry.next_stop_name for entry in self._entries if entry.name == stop_name
        }

    def ordered_next_stops_for(self, stop_name: str) -> list[str]:
        """Same as next_stops_for but keeps asset order."""
        return list(
            dict.fromkeys(
                entry.next_stop_name
                for entry in self._entries
                if entry.name == stop_name
            )
        )

    def first_with_name(self, stop_name: str) -> StopEntry | None:
        for entry in self._entries:
            if entry.name == stop_name:
                return entry
        return None

    def lookup(self, current_stop: str, next_stop: str) -> StopEntry | None:
        """
        Find the entry for a (current, next) pair.

        Falls back to the first entry named ``current_stop`` when the exact
        pair is not listed.
        """
        for entry in self._entries:
            if entry.name == current_stop and entry.next_stop_name == next_stop:
                return entry
        return self.first_with_name(current_stop)

    def coordinates_for(self, current_stop: str, next_stop: str) -> tuple[str, str] | None:
        """
        Resolve (latitude, longitude) for a stop pair.

        Returns:
            The coordinate strings, or None when the stop is unknown.
        """
        entry = self.lookup(current_stop, next_stop)
        if entry is None:
            return None
        return entry.latitude, entry.longitude


def resolve_coordinates(
    directory: StopDirectory, current_stop: str, next_stop: str
) -> tuple[str, str, bool]:
    """
    Coordinates for a record, substituting zeros for unknown stops.

    Returns:
        (latitude, longitude, found)
    """
    coords = directory.coordinates_for(current_stop, next_stop)
    if coords is None:
        return UNKNOWN_COORDINATE, UNKNOWN_COORDINATE, False
    return coords[0], coords[1], True
