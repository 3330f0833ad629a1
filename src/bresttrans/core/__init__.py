"""Core components for BrestTrans."""

from .config import Config
from .entry import RecordEntryFlow, RecordForm, all_fields_filled
from .history import HistoryController
from .models import StopEntry, TransportRecord, TransportType
from .stops import StopDirectory
from .store import RecordStore
from .weather import WeatherClient

__all__ = [
    "Config",
    "RecordEntryFlow",
    "RecordForm",
    "all_fields_filled",
    "HistoryController",
    "StopEntry",
    "TransportRecord",
    "TransportType",
    "StopDirectory",
    "RecordStore",
    "WeatherClient",
]
