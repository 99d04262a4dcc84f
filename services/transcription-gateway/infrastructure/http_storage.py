"""Upload-preset HTTP implementation of the StorageClient interface."""

from typing import BinaryIO

import httpx
from transcipio_common.logging import setup_logging

from exceptions import StorageUploadError
from infrastructure.interfaces import StorageClient

logger = setup_logging()


class HttpUploadStorage(StorageClient):
    """
    Relays files to a hosted media store that accepts unsigned uploads.

    The file is posted as multipart form data together with a fixed upload
    preset, and the store answers with JSON carrying the public URL.
    """

    def __init__(self, client: httpx.Client, upload_url: str, upload_preset: str):
        self._client = client
        self._upload_url = upload_url
        self._upload_preset = upload_preset

    def upload(
        self,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> str:
        filename = object_name.rsplit("/", 1)[-1]
        try:
            response = self._client.post(
                self._upload_url,
                data={"upload_preset": self._upload_preset},
                files={"file": (filename, data, content_type)},
            )
        except httpx.HTTPError as e:
            logger.exception(
                "Storage upload request failed",
                extra={"object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

        if not response.is_success:
            logger.error(
                "Storage upload rejected",
                extra={
                    "object_name": object_name,
                    "status_code": response.status_code,
                },
            )
            raise StorageUploadError(
                object_name,
                Exception(f"Storage responded with {response.status_code}"),
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.exception(
                "Storage response is not JSON",
                extra={"object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

        url = None
        if isinstance(body, dict):
            url = body.get("secure_url") or body.get("url")
        if not url:
            logger.error(
                "Storage response has no URL",
                extra={"object_name": object_name},
            )
            raise StorageUploadError(
                object_name, Exception("Storage response did not include a URL")
            )

        logger.info(
            "File uploaded to storage",
            extra={"object_name": object_name, "size": size, "url": url},
        )
        return url

    def close(self) -> None:
        self._client.close()
