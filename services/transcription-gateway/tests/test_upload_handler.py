import io
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import FakeStorage
from domain import UploadValidator, staged_upload
from domain.staging import remove_quietly
from exceptions import FileTooLargeError, InvalidFileTypeError, StorageUploadError
from handlers import UploadHandler


def _handler(storage, tmp_dir: Path, max_bytes: int = 100) -> UploadHandler:
    validator = UploadValidator(("audio/", "video/"), max_file_bytes=max_bytes)
    return UploadHandler(validator, storage, tmp_dir=tmp_dir)


class TestStagedUpload:
    def test_file_exists_inside_scope_and_is_removed_after(self, tmp_path):
        with staged_upload(io.BytesIO(b"abc"), tmp_path, max_bytes=10) as staged:
            assert staged.path.read_bytes() == b"abc"
            assert staged.size == 3

        assert not staged.path.exists()
        assert list(tmp_path.iterdir()) == []

    def test_file_is_removed_when_scope_raises(self, tmp_path):
        with pytest.raises(RuntimeError):
            with staged_upload(io.BytesIO(b"abc"), tmp_path, max_bytes=10):
                raise RuntimeError("unexpected")

        assert list(tmp_path.iterdir()) == []

    def test_copies_at_most_one_byte_past_the_ceiling(self, tmp_path):
        with staged_upload(io.BytesIO(b"x" * 50), tmp_path, max_bytes=10) as staged:
            assert staged.size == 11

    def test_cleanup_failure_is_swallowed(self, tmp_path):
        with patch.object(Path, "unlink", side_effect=PermissionError("locked")):
            remove_quietly(tmp_path / "missing")


class TestUploadHandler:
    def test_stores_accepted_upload(self, tmp_path):
        storage = FakeStorage()

        result = _handler(storage, tmp_path).process(
            io.BytesIO(b"video-bytes"), "My Clip.MP4", "video/mp4"
        )

        assert result.file.size == len(b"video-bytes")
        assert result.storage_key == f"uploads/{result.file.name}"
        assert result.url == f"https://cdn.test/{result.storage_key}"
        assert result.file.name.endswith("_My_Clip.mp4")
        assert storage.uploads[0]["data"] == b"video-bytes"
        assert storage.uploads[0]["content_type"] == "video/mp4"
        assert list(tmp_path.iterdir()) == []

    def test_rejected_type_leaves_no_temp_file(self, tmp_path):
        storage = FakeStorage()

        with pytest.raises(InvalidFileTypeError):
            _handler(storage, tmp_path).process(io.BytesIO(b"%PDF"), "doc.pdf", "application/pdf")

        assert storage.uploads == []
        assert list(tmp_path.iterdir()) == []

    def test_oversized_upload_leaves_no_temp_file(self, tmp_path):
        with pytest.raises(FileTooLargeError):
            _handler(FakeStorage(), tmp_path, max_bytes=4).process(
                io.BytesIO(b"12345"), "a.mp3", "audio/mpeg"
            )

        assert list(tmp_path.iterdir()) == []

    def test_upload_exactly_at_ceiling_is_stored(self, tmp_path):
        storage = FakeStorage()

        result = _handler(storage, tmp_path, max_bytes=4).process(
            io.BytesIO(b"1234"), "a.mp3", "audio/mpeg"
        )

        assert result.file.size == 4

    def test_storage_failure_leaves_no_temp_file(self, tmp_path):
        with pytest.raises(StorageUploadError):
            _handler(FakeStorage(fail=True), tmp_path).process(
                io.BytesIO(b"abc"), "a.mp3", "audio/mpeg"
            )

        assert list(tmp_path.iterdir()) == []
