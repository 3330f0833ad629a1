"""
Local CSV export.
"""

import logging
from datetime import datetime
from pathlib import Path

from .csv_codec import ENCODING

logger = logging.getLogger(__name__)

EXPORT_FILENAME_FORMAT = "bresttrans_data_%Y%m%d_%H%M%S.csv"


def default_export_directory() -> Path:
    return Path.home() / "BrestTrans" / "exports"


def export_filename(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime(EXPORT_FILENAME_FORMAT)


def export_to_local_file(
    text: str,
    directory: str | Path | None = None,
    now: datetime | None = None,
) -> Path:
    """
    Write CSV text to the export directory.

    Two exports in the same second share a name and the later one wins.

    Args:
        text: Encoded CSV.
        directory: Target directory, created if missing.
        now: Timestamp for the file name. Defaults to the current time.

    Returns:
        Path to the written file.
    """
    export_dir = Path(directory).expanduser() if directory else default_export_directory()
    export_dir.mkdir(parents=True, exist_ok=True)

    filepath = export_dir / export_filename(now)
    with open(filepath, "w", encoding=ENCODING, newline="") as f:
        f.write(text)

    logger.info(f"CSV exported: {filepath}")
    return filepath
