"""
Unit tests for the Drive uploader.
"""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest

from bresttrans.core.drive import (
    CSV_MIMETYPE,
    DriveUploader,
    extract_folder_id,
    remote_filename,
)


class TestExtractFolderId:
    """Tests for folder-link parsing."""

    @pytest.mark.parametrize(
        "link,expected",
        [
            ("https://drive.google.com/drive/folders/abc123?usp=sharing", "abc123"),
            ("https://drive.google.com/drive/folders/abc123", "abc123"),
            ("https://drive.google.com/drive/u/0/folders/X-y_Z", "X-y_Z"),
        ],
    )
    def test_valid_links(self, link, expected):
        assert extract_folder_id(link) == expected

    @pytest.mark.parametrize(
        "link",
        [
            None,
            "",
            "https://drive.google.com/file/d/abc/view",
            "https://drive.google.com/drive/folders/",
            "https://drive.google.com/drive/folders/?usp=sharing",
        ],
    )
    def test_links_without_folder(self, link):
        assert extract_folder_id(link) is None


def test_remote_filename():
    assert remote_filename(datetime(2024, 3, 9, 7, 0, 59)) == "История_20240309_070059.csv"


class TestDriveUploader:
    """Upload behaviour with the Drive service mocked out."""

    @pytest.fixture
    def notices(self):
        return []

    @pytest.fixture
    def uploader(self, tmp_path, notices):
        return DriveUploader({"cache_dir": str(tmp_path / "cache")}, notify=notices.append)

    @pytest.fixture
    def service(self):
        service = MagicMock()
        service.files.return_value.create.return_value.execute.return_value = {"id": "file-1"}
        return service

    def test_successful_upload(self, uploader, service, notices, tmp_path):
        seen = {}

        def create(body, media_body, fields):
            seen["body"] = body
            seen["mimetype"] = media_body.mimetype()
            seen["files"] = {p.name: p.read_text(encoding="utf-8") for p in (tmp_path / "cache").iterdir()}
            request = MagicMock()
            request.execute.return_value = {"id": "file-1"}
            return request

        service.files.return_value.create.side_effect = create
        credentials = object()

        with patch("bresttrans.core.drive.build", return_value=service) as build:
            ok = uploader.upload(
                "header\nrow\n",
                "folder-9",
                credentials,
                now=datetime(2024, 5, 1, 12, 30, 0),
            )

        assert ok is True
        assert notices == []
        build.assert_called_once_with("drive", "v3", credentials=credentials, cache_discovery=False)
        assert seen["body"] == {"name": "История_20240501_123000.csv", "parents": ["folder-9"]}
        assert seen["mimetype"] == CSV_MIMETYPE
        assert list(seen["files"].values()) == ["header\nrow\n"]

    def test_temp_file_removed_after_upload(self, uploader, service, tmp_path):
        with patch("bresttrans.core.drive.build", return_value=service):
            uploader.upload("data\n", "folder", object())

        assert list((tmp_path / "cache").iterdir()) == []

    def test_api_error_reports_failure(self, uploader, service, notices, tmp_path):
        service.files.return_value.create.return_value.execute.side_effect = RuntimeError("quota")

        with patch("bresttrans.core.drive.build", return_value=service):
            ok = uploader.upload("data\n", "folder", object())

        assert ok is False
        assert notices == ["Ошибка при загрузке: quota"]
        assert list((tmp_path / "cache").iterdir()) == []

    def test_missing_file_id_is_failure(self, uploader, service, notices):
        service.files.return_value.create.return_value.execute.return_value = {}

        with patch("bresttrans.core.drive.build", return_value=service):
            assert uploader.upload("data\n", "folder", object()) is False
        assert len(notices) == 1

    def test_empty_text_is_refused(self, uploader):
        with patch("bresttrans.core.drive.build") as build:
            assert uploader.upload("", "folder", object()) is False
        build.assert_not_called()

    def test_default_cache_dir(self):
        uploader = DriveUploader()
        assert uploader.cache_dir.exists()
