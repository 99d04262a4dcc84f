"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .http_storage import HttpUploadStorage
from .memory_rate_limiter import InMemoryRateLimiter
from .minio_storage import MinioStorage
from .redis_rate_limiter import RedisRateLimiter

__all__ = [
    "AssemblyAITranscriber",
    "HttpUploadStorage",
    "InMemoryRateLimiter",
    "MinioStorage",
    "RedisRateLimiter",
]
