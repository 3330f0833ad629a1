"""
Record entry flow.

Turns the data-entry form into a TransportRecord: validate, timestamp,
resolve stop coordinates, look up weather, then hand the finished record
to the store. Saves are processed one at a time in submission order.
"""

import logging
import re
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Callable

from .models import DEFAULT_TRANSPORT_TYPE, TransportRecord
from .stops import StopDirectory, resolve_coordinates
from .weather import WeatherClient

logger = logging.getLogger(__name__)

DIGITS = re.compile(r"[0-9]+")
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

NOTICE_INVALID = "Пожалуйста, заполните все поля корректно"
NOTICE_NO_COORDINATES = "Не найдены координаты для остановки"
NOTICE_SAVED = "Сохранено"


class EntryState(Enum):
    """Entry flow state machine states."""

    EDITING = "editing"
    VALIDATING = "validating"
    SAVING = "saving"
    SAVED = "saved"


@dataclass
class RecordForm:
    """Current contents of the data-entry form."""

    vehicle_number: str = ""
    route_number: str = ""
    transport_type: str = DEFAULT_TRANSPORT_TYPE
    current_stop: str = ""
    next_stop: str = ""
    people_at_stop: str = ""
    people_in_transport: str = ""
    entered: str = ""
    exited: str = ""

    def numeric_fields(self) -> list[str]:
        return [self.people_at_stop, self.people_in_transport, self.entered, self.exited]

    def text_fields(self) -> list[str]:
        return [
            self.vehicle_number,
            self.route_number,
            self.current_stop,
            self.next_stop,
            self.transport_type,
        ]


def is_count(value: str) -> bool:
    return DIGITS.fullmatch(value) is not None


def all_fields_filled(form: RecordForm) -> bool:
    """
    Validation gate for saving.

    Counts must be non-empty digit strings of any length; text fields must
    be non-blank. No cross-field checks.
    """
    return all(is_count(value) for value in form.numeric_fields()) and all(
        value.strip() for value in form.text_fields()
    )


def next_stop_options(directory: StopDirectory, form: RecordForm) -> list[str]:
    """Next stops allowed after the form's current stop."""
    return directory.ordered_next_stops_for(form.current_stop)


def build_record(
    form: RecordForm,
    directory: StopDirectory,
    weather: WeatherClient,
    now: datetime | None = None,
    notify: Callable[[str], None] | None = None,
) -> TransportRecord:
    """
    Assemble a record from a validated form.

    Blocks on the weather request.
    """
    timestamp = (now or datetime.now()).strftime(TIME_FORMAT)

    latitude, longitude, found = resolve_coordinates(
        directory, form.current_stop, form.next_stop
    )
    if not found:
        logger.warning(f"No coordinates for stop '{form.current_stop}' -> '{form.next_stop}'")
        if notify:
            notify(NOTICE_NO_COORDINATES)

    return TransportRecord(
        time=timestamp,
        vehicle_number=form.vehicle_number,
        route_number=form.route_number,
        type=form.transport_type,
        current_stop=form.current_stop,
        next_stop=form.next_stop,
        people_at_stop=form.people_at_stop,
        people_in_transport=form.people_in_transport,
        entered=form.entered,
        exited=form.exited,
        latitude=latitude,
        longitude=longitude,
        weather=weather.fetch(latitude, longitude),
    )


class RecordEntryFlow:
    """
    Drives saving of entry-form records.

    Features:
    - Synchronous validation with a user notice on failure
    - Background record assembly (coordinates + weather)
    - Serialised saves: a single worker thread, FIFO order
    """

    def __init__(
        self,
        directory: StopDirectory,
        weather: WeatherClient,
        on_record: Callable[[TransportRecord], None],
        notify: Callable[[str], None] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the entry flow.

        Args:
            directory: Stop directory for coordinates.
            weather: Weather client used for every record.
            on_record: Receives each finished record, on the worker thread.
            notify: Called with user-facing messages.
            clock: Source of the save timestamp.
        """
        self.directory = directory
        self.weather = weather
        self.on_record = on_record
        self.notify = notify
        self.clock = clock

        self._state = EntryState.EDITING
        self._lock = threading.Lock()
        self._in_flight = 0
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="RecordSave")

    @property
    def state(self) -> EntryState:
        return self._state

    def _set_state(self, state: EntryState) -> None:
        with self._lock:
            self._state = state

    def edit(self) -> None:
        """Mark the form as being edited again after a save."""
        with self._lock:
            if self._in_flight == 0:
                self._state = EntryState.EDITING

    def save(self, form: RecordForm) -> Future:
        """
        Validate the form and queue a record for saving.

        Args:
            form: Form contents. A copy is taken, so the form can be edited
                while the save is in flight.

        Returns:
            Future resolving to the saved TransportRecord, or to None when
            validation failed.
        """
        self._set_state(EntryState.VALIDATING)

        if not all_fields_filled(form):
            logger.info("Save rejected: form incomplete")
            self._set_state(EntryState.EDITING)
            if self.notify:
                self.notify(NOTICE_INVALID)
            rejected: Future = Future()
            rejected.set_result(None)
            return rejected

        with self._lock:
            self._in_flight += 1
            self._state = EntryState.SAVING

        return self._executor.submit(self._save, replace(form))

    def _save(self, form: RecordForm) -> TransportRecord:
        try:
            record = build_record(
                form, self.directory, self.weather, now=self.clock(), notify=self.notify
            )
            self.on_record(record)
        except Exception as e:
            logger.error(f"Failed to save record: {e}")
            with self._lock:
                self._in_flight -= 1
                if self._in_flight == 0:
                    self._state = EntryState.EDITING
            raise

        with self._lock:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._state = EntryState.SAVED

        logger.info(f"Record saved: {record.summary}")
        if self.notify:
            self.notify(NOTICE_SAVED)
        return record

    def shutdown(self, wait: bool = False) -> None:
        self._executor.shutdown(wait=wait)
