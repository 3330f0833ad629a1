"""
Unit tests for the session record store.
"""

import pytest

from bresttrans.core import csv_codec
from bresttrans.core.store import RecordStore


class TestRecordStore:
    """Ordering and mutation behaviour."""

    @pytest.fixture
    def store(self, sample_records):
        store = RecordStore()
        for record in sample_records:
            store.append(record)
        return store

    def test_append_preserves_insertion_order(self, store, sample_records):
        assert store.snapshot() == sample_records
        assert list(store) == sample_records
        assert len(store) == 3

    def test_duplicates_are_kept(self, sample_record):
        store = RecordStore()
        store.append(sample_record)
        store.append(sample_record)
        assert len(store) == 2

    @pytest.mark.parametrize("index", [0, 1, 2])
    def test_remove_at_keeps_relative_order(self, store, sample_records, index):
        removed = store.remove_at(index)

        expected = [r for i, r in enumerate(sample_records) if i != index]
        assert removed == sample_records[index]
        assert store.snapshot() == expected

    def test_remove_at_out_of_range(self, store):
        with pytest.raises(IndexError):
            store.remove_at(5)

    def test_remove_by_value(self, store, sample_records, record_factory):
        assert store.remove(sample_records[1]) is True
        assert store.snapshot() == [sample_records[0], sample_records[2]]
        assert store.remove(record_factory(9)) is False

    def test_clear(self, store):
        store.clear()

        assert store.is_empty
        assert store.snapshot() == []
        assert csv_codec.encode(store) == csv_codec.encode([])

    def test_snapshot_is_a_copy(self, store):
        snapshot = store.snapshot()
        snapshot.clear()
        assert len(store) == 3

    def test_listeners_called_on_every_change(self, store, record_factory):
        calls = []
        store.subscribe(lambda s: calls.append(len(s)))

        store.append(record_factory(4))
        store.remove_at(0)
        store.clear()

        assert calls == [4, 3, 0]

    def test_unsubscribe(self, store, record_factory):
        calls = []

        def listener(s):
            calls.append(len(s))

        store.subscribe(listener)
        store.unsubscribe(listener)
        store.append(record_factory(4))

        assert calls == []
