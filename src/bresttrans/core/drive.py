"""
Google Drive upload of exported CSV data.

The CSV is written to a temporary file first and then sent with a single
Drive v3 files.create call into the folder the user linked in their
profile. Credentials only need the drive.file scope.
"""

import logging
import os
import tempfile
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseUpload

from .csv_codec import ENCODING

logger = logging.getLogger(__name__)

CSV_MIMETYPE = "text/csv"
REMOTE_FILENAME_FORMAT = "История_%Y%m%d_%H%M%S.csv"
UPLOAD_ERROR_NOTICE = "Ошибка при загрузке: {message}"


def extract_folder_id(drive_link: str | None) -> str | None:
    """
    Pull the folder id out of a Drive folder link.

    ``https://drive.google.com/drive/folders/<id>?usp=sharing`` -> ``<id>``

    Returns:
        The id, or None when the link has no ``folders/`` part or the id is
        blank.
    """
    if not drive_link or "folders/" not in drive_link:
        return None
    folder_id = drive_link.split("folders/", 1)[1].split("?", 1)[0]
    return folder_id if folder_id.strip() else None


def remote_filename(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime(REMOTE_FILENAME_FORMAT)


class DriveUploader:
    """
    Uploads CSV text to a Drive folder.

    Failures never propagate: they are logged, reported through ``notify``
    and turned into a False return value.
    """

    def __init__(
        self,
        config: dict | None = None,
        notify: Callable[[str], None] | None = None,
    ):
        """
        Initialize the uploader.

        Args:
            config: Drive configuration dict (cache_dir).
            notify: Called with a user-facing message when an upload fails.
        """
        self.config = config or {}
        cache_dir = self.config.get("cache_dir")
        self.cache_dir = Path(cache_dir).expanduser() if cache_dir else Path(tempfile.gettempdir())
        self.notify = notify

    def _build_service(self, credentials: Any) -> Any:
        return build("drive", "v3", credentials=credentials, cache_discovery=False)

    def _write_temp_file(self, text: str) -> Path:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        temp_path = self.cache_dir / f"records_{int(time.time() * 1000)}.csv"
        with open(temp_path, "w", encoding=ENCODING, newline="") as f:
            f.write(text)
        return temp_path

    def upload(
        self,
        text: str,
        folder_id: str,
        credentials: Any,
        now: datetime | None = None,
    ) -> bool:
        """
        Create a CSV file in a Drive folder.

        Args:
            text: Encoded CSV. Empty text is refused without a network call.
            folder_id: Parent folder id.
            credentials: google-auth credentials with the drive.file scope.
            now: Timestamp for the remote file name.

        Returns:
            True if Drive acknowledged the new file with an id.
        """
        if not text:
            logger.warning("Refusing to upload empty CSV")
            return False

        temp_path: Path | None = None
        try:
            temp_path = self._write_temp_file(text)
            metadata = {"name": remote_filename(now), "parents": [folder_id]}

            service = self._build_service(credentials)
            with open(temp_path, "rb") as fh:
                media = MediaIoBaseUpload(fh, mimetype=CSV_MIMETYPE, resumable=False)
                response = (
                    service.files()
                    .create(body=metadata, media_body=media, fields="id")
                    .execute()
                )

            file_id = (response or {}).get("id")
            if not file_id:
                raise RuntimeError("Drive did not return a file id")

            logger.info(f"Uploaded {metadata['name']} to folder {folder_id} (id={file_id})")
            return True

        except Exception as e:
            logger.error(f"Drive upload failed: {e}")
            if self.notify:
                self.notify(UPLOAD_ERROR_NOTICE.format(message=e))
            return False

        finally:
            if temp_path is not None and temp_path.exists():
                try:
                    os.remove(temp_path)
                except OSError as e:
                    logger.warning(f"Failed to remove temp file {temp_path}: {e}")
