"""
In-memory record store for the current session.

Records are kept in entry order. Nothing is persisted; the store lives as
long as the application process.
"""

import logging
from typing import Callable, Iterator

from .models import TransportRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Ordered collection of TransportRecord objects.

    Mutated only through append/remove_at/remove/clear, all from the UI
    thread. Listeners are called after every mutation.
    """

    def __init__(self, records: list[TransportRecord] | None = None):
        self._records: list[TransportRecord] = list(records or [])
        self._listeners: list[Callable[["RecordStore"], None]] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TransportRecord]:
        return iter(list(self._records))

    def __getitem__(self, index: int) -> TransportRecord:
        return self._records[index]

    @property
    def is_empty(self) -> bool:
        return not self._records

    def snapshot(self) -> list[TransportRecord]:
        """Copy of the records in insertion order."""
        return list(self._records)

    def append(self, record: TransportRecord) -> None:
        self._records.append(record)
        logger.debug(f"Record added ({len(self._records)} total)")
        self._notify()

    def remove_at(self, index: int) -> TransportRecord:
        """
        Remove the record at a position.

        Raises:
            IndexError: If index is out of range.
        """
        record = self._records.pop(index)
        logger.debug(f"Record {index} removed ({len(self._records)} left)")
        self._notify()
        return record

    def remove(self, record: TransportRecord) -> bool:
        """
        Remove the first record equal to ``record``.

        Returns:
            True if a record was removed.
        """
        try:
            self._records.remove(record)
        except ValueError:
            return False
        self._notify()
        return True

    def clear(self) -> None:
        count = len(self._records)
        self._records.clear()
        logger.info(f"Cleared {count} records")
        self._notify()

    def subscribe(self, listener: Callable[["RecordStore"], None]) -> None:
        """Register a callback invoked after each change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[["RecordStore"], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
