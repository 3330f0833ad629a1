"""
History actions: delete, local CSV export and Drive upload.

Both export and upload refuse to run on an empty store.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable

from . import csv_codec
from .drive import DriveUploader, extract_folder_id
from .export import export_to_local_file
from .profile import ProfileStore
from .store import RecordStore

logger = logging.getLogger(__name__)

NOTICE_NOTHING_TO_EXPORT = "Нет данных для экспорта"
NOTICE_NOTHING_TO_UPLOAD = "Нет записей для отправки"
NOTICE_EXPORTED = "Файл сохранён: {name}"
NOTICE_EXPORT_FAILED = "Ошибка при сохранении файла"
NOTICE_NO_ACCOUNT = "Ошибка: нет учётной записи или ссылки на папку"
NOTICE_UPLOADED = "Файл успешно отправлен в Google Drive"
NOTICE_UPLOAD_FAILED = "Ошибка при загрузке файла"


class HistoryController:
    """
    Operations behind the history screen.

    The store is read on the calling thread; file and network work can be
    pushed to a background thread with the *_async variants. The store is
    cleared only after a successful upload.
    """

    def __init__(
        self,
        store: RecordStore,
        uploader: DriveUploader,
        profile_store: ProfileStore,
        credentials_provider: Callable[[], Any],
        export_dir: str | Path | None = None,
        notify: Callable[[str], None] | None = None,
        run_on_ui: Callable[[Callable[[], None]], None] | None = None,
    ):
        """
        Initialize the controller.

        Args:
            store: Session record store.
            uploader: Drive upload sink.
            profile_store: Source of the linked Drive folder.
            credentials_provider: Returns Drive credentials or None.
            export_dir: Directory for local CSV exports.
            notify: Called with user-facing messages.
            run_on_ui: Runs a store mutation on the UI thread. Defaults to
                running it inline.
        """
        self.store = store
        self.uploader = uploader
        self.profile_store = profile_store
        self.credentials_provider = credentials_provider
        self.export_dir = export_dir
        self.notify = notify
        self.run_on_ui = run_on_ui or (lambda fn: fn())
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="History")

    def _notice(self, message: str) -> None:
        if self.notify:
            self.notify(message)

    def delete(self, index: int) -> None:
        self.store.remove_at(index)

    def delete_all(self) -> None:
        self.store.clear()

    def export(self, records: list | None = None) -> Path | None:
        """
        Save records as a local CSV file.

        Args:
            records: Records to write. Defaults to a snapshot of the store.

        Returns:
            Path of the file, or None if there was nothing to export or the
            write failed.
        """
        if records is None:
            records = self.store.snapshot()
        if not records:
            self._notice(NOTICE_NOTHING_TO_EXPORT)
            return None

        text = csv_codec.encode(records)
        try:
            path = export_to_local_file(text, self.export_dir)
        except OSError as e:
            logger.error(f"CSV export failed: {e}")
            self._notice(NOTICE_EXPORT_FAILED)
            return None

        self._notice(NOTICE_EXPORTED.format(name=path.name))
        return path

    def upload(self, records: list | None = None) -> bool:
        """
        Upload records to the linked Drive folder.

        Args:
            records: Records to send. Defaults to a snapshot of the store.

        Returns:
            True if the upload succeeded; the uploaded records are then
            removed from the store.
        """
        if records is None:
            records = self.store.snapshot()
        if not records:
            self._notice(NOTICE_NOTHING_TO_UPLOAD)
            return False

        folder_id = extract_folder_id(self.profile_store.profile.drive_link)
        credentials = None
        if folder_id:
            try:
                credentials = self.credentials_provider()
            except Exception as e:
                logger.error(f"Failed to obtain Drive credentials: {e}")
        if folder_id is None or credentials is None:
            logger.warning("Upload skipped: missing Drive folder or credentials")
            self._notice(NOTICE_NO_ACCOUNT)
            return False

        success = self.uploader.upload(csv_codec.encode(records), folder_id, credentials)
        if success:
            self.run_on_ui(lambda: self._remove_uploaded(records))
            self._notice(NOTICE_UPLOADED)
        else:
            self._notice(NOTICE_UPLOAD_FAILED)
        return success

    def _remove_uploaded(self, records: list) -> None:
        # Records added while the upload was running stay in the store
        if self.store.snapshot() == records:
            self.store.clear()
            return
        for record in records:
            self.store.remove(record)

    def export_async(self) -> Future:
        """Snapshot the store now and export on the background thread."""
        return self._executor.submit(self.export, self.store.snapshot())

    def upload_async(self) -> Future:
        """Snapshot the store now and upload on the background thread."""
        return self._executor.submit(self.upload, self.store.snapshot())

    def shutdown(self, wait: bool = False) -> None:
        self._executor.shutdown(wait=wait)
