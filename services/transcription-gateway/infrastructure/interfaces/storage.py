"""Abstract interface for file storage operations."""

from abc import ABC, abstractmethod
from typing import BinaryIO


class StorageClient(ABC):
    """Abstract base class for file storage backends."""

    @abstractmethod
    def upload(
        self,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> str:
        """
        Uploads a file to storage.

        Args:
            object_name: The destination path/name in storage.
            data: File-like object containing the data.
            size: Size of the file in bytes.
            content_type: MIME type of the file.

        Returns:
            A URL the transcription provider can fetch the file from.

        Raises:
            StorageUploadError: If the upload fails.
        """
        pass

    def ensure_ready(self) -> None:
        """Prepares backend resources at startup; a no-op by default."""

    def close(self) -> None:
        """Releases backend resources at shutdown; a no-op by default."""
