"""Application configuration loaded from environment variables."""

import os
import tempfile
from pathlib import Path

from transcipio_common import MinioConfig, RedisConfig
from pydantic import BaseModel


class AuthConfig(BaseModel, frozen=True):
    """Shared secret expected in the x-api-key header."""

    private_api_key: str = ""


class RateLimitConfig(BaseModel, frozen=True):
    """Sliding-window rate limiter configuration."""

    backend: str = "memory"
    window_seconds: int = 60
    max_requests: int = 10
    max_keys: int = 10_000
    prune_interval: int = 1_000
    redis_key_prefix: str = "ratelimit:"


class UploadConfig(BaseModel, frozen=True):
    """Upload validation configuration."""

    max_file_bytes: int = 20 * 1024 * 1024
    allowed_mime_prefixes: tuple[str, ...] = ("audio/", "video/")
    tmp_dir: Path = Path(tempfile.gettempdir())
    object_prefix: str = "uploads/"


class StorageConfig(BaseModel, frozen=True):
    """Object storage relay configuration."""

    backend: str = "http"
    upload_url: str = ""
    upload_preset: str = "ml_default"
    timeout_seconds: float = 120.0


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str = ""
    default_language_code: str = "en"


class PollingConfig(BaseModel, frozen=True):
    """Transcript polling configuration."""

    interval_seconds: float = 3.0
    timeout_seconds: float | None = 1800.0


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    auth: AuthConfig
    rate_limit: RateLimitConfig
    upload: UploadConfig
    storage: StorageConfig
    minio: MinioConfig
    redis: RedisConfig
    assemblyai: AssemblyAIConfig
    polling: PollingConfig


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _optional_float(value: str) -> float | None:
    return float(value) if value.strip() else None


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        auth=AuthConfig(
            private_api_key=os.getenv("PRIVATE_API_KEY", ""),
        ),
        rate_limit=RateLimitConfig(
            backend=os.getenv("RATE_LIMIT_BACKEND", "memory"),
            window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60")),
            max_requests=int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "10")),
            max_keys=int(os.getenv("RATE_LIMIT_MAX_KEYS", "10000")),
        ),
        upload=UploadConfig(
            max_file_bytes=int(
                os.getenv("UPLOAD_MAX_FILE_BYTES", str(20 * 1024 * 1024))
            ),
            allowed_mime_prefixes=_split_csv(
                os.getenv("UPLOAD_ALLOWED_MIME_PREFIXES", "audio/,video/")
            ),
            tmp_dir=Path(os.getenv("UPLOAD_TMP_DIR", tempfile.gettempdir())),
        ),
        storage=StorageConfig(
            backend=os.getenv("STORAGE_BACKEND", "http"),
            upload_url=os.getenv("STORAGE_UPLOAD_URL", ""),
            upload_preset=os.getenv("STORAGE_UPLOAD_PRESET", "ml_default"),
            timeout_seconds=float(os.getenv("STORAGE_TIMEOUT_SECONDS", "120")),
        ),
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            bucket_name=os.getenv("MINIO_BUCKET", "uploads"),
        ),
        redis=RedisConfig(
            host=os.getenv("REDIS_HOST", "redis"),
            port=int(os.getenv("REDIS_PORT", "6379")),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
        ),
        polling=PollingConfig(
            interval_seconds=float(os.getenv("POLL_INTERVAL_SECONDS", "3")),
            timeout_seconds=_optional_float(os.getenv("POLL_TIMEOUT_SECONDS", "1800")),
        ),
    )
