"""
Unit tests for the stop directory.
"""

import pytest

from bresttrans.core.models import StopEntry
from bresttrans.core.stops import (
    DEFAULT_ASSET,
    StopDirectory,
    load_stops,
    resolve_coordinates,
)


class TestLoadStops:
    """Tests for reading the JSON asset."""

    def test_load_from_file(self, stop_asset):
        """Rows map name/moveto/x/y onto StopEntry fields."""
        entries = load_stops(stop_asset)

        assert len(entries) == 5
        assert entries[0] == StopEntry(
            name="Вокзал",
            next_stop_name="Площадь Ленина",
            longitude="23.6877",
            latitude="52.0976",
        )

    def test_missing_file_gives_empty_list(self, tmp_path):
        assert load_stops(tmp_path / "missing.json") == []

    def test_corrupt_file_gives_empty_list(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{not json", encoding="utf-8")
        assert load_stops(path) == []

    def test_rows_missing_keys_give_empty_list(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text('[{"name": "A"}]', encoding="utf-8")
        assert load_stops(path) == []

    def test_bundled_asset_loads(self):
        """The packaged asset is present and readable."""
        assert DEFAULT_ASSET.exists()
        assert len(load_stops()) > 0

    def test_coordinates_stay_strings(self, tmp_path):
        path = tmp_path / "numbers.json"
        path.write_text('[{"name": "A", "moveto": "B", "x": 23.5, "y": "52.10"}]', encoding="utf-8")
        entry = load_stops(path)[0]
        assert entry.longitude == "23.5"
        assert entry.latitude == "52.10"


class TestStopDirectory:
    """Tests for directory queries."""

    def test_distinct_stop_names(self, directory):
        assert directory.distinct_stop_names() == {"Вокзал", "Площадь Ленина", "Центральный рынок"}

    def test_ordered_stop_names_keep_asset_order(self, directory):
        assert directory.ordered_stop_names() == ["Вокзал", "Площадь Ленина", "Центральный рынок"]

    def test_next_stops_deduplicated(self, directory):
        assert directory.next_stops_for("Вокзал") == {"Площадь Ленина", "Улица Пушкинская"}
        assert directory.ordered_next_stops_for("Вокзал") == ["Площадь Ленина", "Улица Пушкинская"]

    @pytest.mark.parametrize("name", ["Нет такой", "", "вокзал"])
    def test_next_stops_unknown_name(self, directory, name):
        """Unknown names (matching is exact) have no next stops."""
        assert directory.next_stops_for(name) == set()

    def test_lookup_exact_match(self, directory):
        """The first exact (current, next) match wins."""
        entry = directory.lookup("Вокзал", "Улица Пушкинская")
        assert entry.longitude == "23.6879"
        assert entry.latitude == "52.0974"

        entry = directory.lookup("Вокзал", "Площадь Ленина")
        assert entry.longitude == "23.6877"

    def test_lookup_falls_back_to_first_with_name(self, directory):
        entry = directory.lookup("Площадь Ленина", "Центральный рынок")
        assert entry == directory.first_with_name("Площадь Ленина")
        assert entry.next_stop_name == "Вокзал"

    def test_lookup_unknown_stop(self, directory):
        assert directory.lookup("Нет такой", "Вокзал") is None

    def test_empty_directory(self):
        directory = StopDirectory()
        assert len(directory) == 0
        assert directory.distinct_stop_names() == set()
        assert directory.lookup("A", "B") is None

    def test_load_classmethod(self, stop_asset):
        assert len(StopDirectory.load(stop_asset)) == 5


class TestResolveCoordinates:
    """Coordinate resolution with the zero fallback."""

    def test_known_pair(self, single_stop_directory):
        assert resolve_coordinates(single_stop_directory, "A", "B") == ("2", "1", True)

    def test_known_stop_unknown_next(self, single_stop_directory):
        assert resolve_coordinates(single_stop_directory, "A", "Z") == ("2", "1", True)

    def test_unknown_stop(self, single_stop_directory):
        assert resolve_coordinates(single_stop_directory, "Z", "B") == ("0.0", "0.0", False)
