"""Infrastructure interface exports."""

from .rate_limiter import RateLimiter
from .storage import StorageClient
from .transcription_service import TranscriptionService

__all__ = ["RateLimiter", "StorageClient", "TranscriptionService"]
