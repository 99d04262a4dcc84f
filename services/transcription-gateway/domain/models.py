"""Domain models for the transcription gateway."""

from enum import Enum

from pydantic import BaseModel


class SanitizedFile(BaseModel, frozen=True):
    """An accepted upload with its collision-resistant storage name."""

    name: str
    original_name: str
    size: int
    mime_type: str


class TranscriptStatus(str, Enum):
    """Lifecycle states reported by the transcription provider."""

    queued = "queued"
    processing = "processing"
    completed = "completed"
    error = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (TranscriptStatus.completed, TranscriptStatus.error)


class TranscriptWord(BaseModel, frozen=True):
    """A single recognised word; times are in milliseconds."""

    text: str
    start: int
    end: int
    confidence: float | None = None


class TranscriptionJob(BaseModel, frozen=True):
    """A transcription job as reported by the provider."""

    id: str
    status: TranscriptStatus
    audio_url: str | None = None
    language_code: str | None = None
    text: str | None = None
    words: tuple[TranscriptWord, ...] = ()
    error: str | None = None


class TranscriptFormat(str, Enum):
    """Downloadable transcript renderings."""

    txt = "txt"
    paragraphs = "paragraphs"
    srt = "srt"
    json = "json"


class StoredUpload(BaseModel, frozen=True):
    """Result of relaying an accepted upload to storage."""

    file: SanitizedFile
    storage_key: str
    url: str
