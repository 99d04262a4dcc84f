"""Handler for validating uploads and relaying them to storage."""

from pathlib import Path
from typing import BinaryIO

from transcipio_common import setup_logging

from domain import StoredUpload, UploadValidator, staged_upload
from infrastructure.interfaces import StorageClient

logger = setup_logging()


class UploadHandler:
    """Orchestrates staging, validation and storage of an upload."""

    def __init__(
        self,
        validator: UploadValidator,
        storage: StorageClient,
        tmp_dir: Path,
        object_prefix: str = "uploads/",
    ):
        self._validator = validator
        self._storage = storage
        self._tmp_dir = tmp_dir
        self._object_prefix = object_prefix

    def process(
        self, source: BinaryIO, filename: str | None, content_type: str | None
    ) -> StoredUpload:
        """
        Stages an upload on disk, validates it and relays it to storage.

        The staged temp file is removed whether the upload is stored,
        rejected, or fails in storage.

        Args:
            source: Readable upload body.
            filename: Client-supplied filename.
            content_type: Declared MIME type.

        Returns:
            StoredUpload with the sanitized file and its public URL.

        Raises:
            InvalidFileTypeError: If the MIME type is not allowed.
            FileTooLargeError: If the upload exceeds the ceiling.
            StorageUploadError: If the storage relay fails.
        """
        with staged_upload(
            source, self._tmp_dir, self._validator.max_file_bytes
        ) as staged:
            sanitized = self._validator.validate(content_type, staged.size, filename)
            storage_key = f"{self._object_prefix}{sanitized.name}"

            logger.info(
                "Upload accepted",
                extra={
                    "original_name": sanitized.original_name,
                    "storage_key": storage_key,
                    "size": sanitized.size,
                    "mime_type": sanitized.mime_type,
                },
            )

            with staged.path.open("rb") as data:
                url = self._storage.upload(
                    object_name=storage_key,
                    data=data,
                    size=sanitized.size,
                    content_type=sanitized.mime_type,
                )

        return StoredUpload(file=sanitized, storage_key=storage_key, url=url)
