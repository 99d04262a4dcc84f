"""MinIO implementation of the StorageClient interface."""

from datetime import timedelta
from typing import BinaryIO

from minio import Minio
from transcipio_common.logging import setup_logging

from exceptions import StorageUploadError
from infrastructure.interfaces import StorageClient

logger = setup_logging()


class MinioStorage(StorageClient):
    """Handles file storage operations using MinIO."""

    def __init__(self, client: Minio, bucket_name: str, url_expiry_seconds: int = 3600):
        self._client = client
        self._bucket_name = bucket_name
        self._url_expiry = timedelta(seconds=url_expiry_seconds)

    def upload(
        self,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> str:
        try:
            self._client.put_object(
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=data,
                length=size,
                content_type=content_type,
            )
            url = self._client.presigned_get_object(
                self._bucket_name, object_name, expires=self._url_expiry
            )
            logger.info(
                "File uploaded to MinIO",
                extra={
                    "object_name": object_name,
                    "size": size,
                    "bucket": self._bucket_name,
                },
            )
            return url
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

    def ensure_ready(self) -> None:
        if not self._client.bucket_exists(self._bucket_name):
            self._client.make_bucket(self._bucket_name)
            logger.info("Bucket created", extra={"bucket_name": self._bucket_name})
        else:
            logger.info("Bucket already exists", extra={"bucket_name": self._bucket_name})
