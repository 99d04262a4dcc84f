"""Domain layer exports."""

from .models import (
    SanitizedFile,
    StoredUpload,
    TranscriptFormat,
    TranscriptionJob,
    TranscriptStatus,
    TranscriptWord,
)
from .poller import PollState, TranscriptionPoller
from .staging import StagedUpload, staged_upload
from .upload_validator import UploadValidator, generate_safe_name, validate_media_url

__all__ = [
    "SanitizedFile",
    "StoredUpload",
    "TranscriptFormat",
    "TranscriptionJob",
    "TranscriptStatus",
    "TranscriptWord",
    "PollState",
    "TranscriptionPoller",
    "StagedUpload",
    "staged_upload",
    "UploadValidator",
    "generate_safe_name",
    "validate_media_url",
]
