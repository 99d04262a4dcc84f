"""Media upload endpoints."""

import base64
import binascii
import io
from typing import Annotated, BinaryIO

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from transcipio_common.logging import setup_logging

from dependencies import get_upload_handler
from exceptions import MissingFileError, StorageUploadError, UploadValidationError
from handlers import UploadHandler
from response_models import Base64UploadRequest, UploadedFile, UploadResponse
from security import guarded

logger = setup_logging()

router = APIRouter(tags=["upload"], dependencies=guarded)

UploadHandlerDep = Annotated[UploadHandler, Depends(get_upload_handler)]


def _store(
    handler: UploadHandler,
    source: BinaryIO,
    filename: str | None,
    content_type: str | None,
) -> UploadResponse:
    try:
        stored = handler.process(source, filename, content_type)
    except UploadValidationError as e:
        logger.info(
            "Upload rejected",
            extra={"file_name": filename, "content_type": content_type, "reason": str(e)},
        )
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUploadError:
        raise HTTPException(status_code=502, detail="File upload failed")
    except Exception:
        logger.exception("Upload failed", extra={"file_name": filename})
        raise HTTPException(status_code=500, detail="Internal server error")

    return UploadResponse(
        file=UploadedFile(
            name=stored.file.name,
            size=stored.file.size,
            mime=stored.file.mime_type,
            storage_key=stored.storage_key,
            url=stored.url,
        )
    )


@router.post("/upload", response_model=UploadResponse)
def upload_media(
    handler: UploadHandlerDep,
    file: UploadFile | None = File(None),
    upload: UploadFile | None = File(None),
) -> UploadResponse:
    """
    Uploads a media file sent as multipart form data.

    Accepts the file under either the ``file`` or ``upload`` field, validates
    it, and relays it to object storage.
    """
    received = file or upload
    if received is None:
        raise HTTPException(status_code=400, detail=str(MissingFileError()))

    return _store(handler, received.file, received.filename, received.content_type)


@router.post("/upload/base64", response_model=UploadResponse)
def upload_media_base64(
    body: Base64UploadRequest, handler: UploadHandlerDep
) -> UploadResponse:
    """Uploads a media file sent as base64 inside a JSON body."""
    if not body.data:
        raise HTTPException(status_code=400, detail=str(MissingFileError()))

    try:
        raw = base64.b64decode(body.data, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="Invalid base64 data")

    return _store(handler, io.BytesIO(raw), body.filename, body.mime_type)
