"""
BrestTrans - Transit ridership survey collector

Field app for recording passenger counts at stops, reviewing them,
exporting them as CSV and uploading them to Google Drive.
"""

__version__ = "0.1.0"
__author__ = "BrestTrans Team"

from .core.models import StopEntry, TransportRecord, TransportType

__all__ = ["StopEntry", "TransportRecord", "TransportType", "__version__"]
