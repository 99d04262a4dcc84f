"""Request and response models for the gateway API."""

from pydantic import BaseModel, ConfigDict, Field


class UploadedFile(BaseModel):
    """Details of a stored upload."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    size: int
    mime: str
    storage_key: str = Field(alias="storageKey")
    url: str


class UploadResponse(BaseModel):
    """Response returned after a successful upload."""

    status: str = "success"
    message: str = "File accepted and processed"
    file: UploadedFile


class Base64UploadRequest(BaseModel):
    """JSON upload variant carrying the file as base64."""

    data: str | None = None
    filename: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")


class TranscribeRequest(BaseModel):
    """Body of a transcription submission."""

    audio_url: str | None = None
    language_code: str | None = None
