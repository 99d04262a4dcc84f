"""FastAPI dependency injection configuration."""

import assemblyai as aai
import httpx
import redis
from minio import Minio
from transcipio_common.logging import setup_logging

from config import AppConfig, load_config
from domain import UploadValidator
from handlers import UploadHandler
from infrastructure import (
    AssemblyAITranscriber,
    HttpUploadStorage,
    InMemoryRateLimiter,
    MinioStorage,
    RedisRateLimiter,
)
from infrastructure.interfaces import RateLimiter, StorageClient, TranscriptionService

logger = setup_logging()

_config = load_config()


def _build_rate_limiter(config: AppConfig) -> RateLimiter:
    settings = config.rate_limit
    if settings.backend == "redis":
        client = redis.Redis(
            host=config.redis.host,
            port=config.redis.port,
            db=config.redis.db,
        )
        logger.info("Using Redis rate limiter", extra={"host": config.redis.host})
        return RedisRateLimiter(
            client,
            window_seconds=settings.window_seconds,
            max_requests=settings.max_requests,
            key_prefix=settings.redis_key_prefix,
        )
    return InMemoryRateLimiter(
        window_seconds=settings.window_seconds,
        max_requests=settings.max_requests,
        max_keys=settings.max_keys,
        prune_interval=settings.prune_interval,
    )


def _build_storage(config: AppConfig) -> StorageClient:
    if config.storage.backend == "minio":
        minio_client = Minio(
            endpoint=config.minio.endpoint,
            access_key=config.minio.user,
            secret_key=config.minio.password,
            secure=config.minio.secure,
        )
        return MinioStorage(
            minio_client,
            config.minio.bucket_name,
            url_expiry_seconds=config.minio.url_expiry_seconds,
        )
    return HttpUploadStorage(
        httpx.Client(timeout=config.storage.timeout_seconds),
        upload_url=config.storage.upload_url,
        upload_preset=config.storage.upload_preset,
    )


def _build_transcription_service(config: AppConfig) -> TranscriptionService:
    api_key = config.assemblyai.api_key
    transcriber = None
    if api_key:
        aai.settings.api_key = api_key
        transcriber = aai.Transcriber()
    else:
        logger.warning("ASSEMBLYAI_API_KEY is not set; transcription is disabled")
    return AssemblyAITranscriber(transcriber, api_key)


_rate_limiter = _build_rate_limiter(_config)
_storage = _build_storage(_config)
_transcription_service = _build_transcription_service(_config)
_validator = UploadValidator(
    allowed_mime_prefixes=_config.upload.allowed_mime_prefixes,
    max_file_bytes=_config.upload.max_file_bytes,
)


def get_config() -> AppConfig:
    """Returns the loaded application configuration."""
    return _config


def get_rate_limiter() -> RateLimiter:
    """Returns the process-wide rate limiter."""
    return _rate_limiter


def get_storage() -> StorageClient:
    """Returns the configured storage client."""
    return _storage


def get_transcription_service() -> TranscriptionService:
    """Returns the configured transcription service."""
    return _transcription_service


def get_upload_handler() -> UploadHandler:
    """Returns an upload handler bound to the configured storage."""
    return UploadHandler(
        _validator,
        _storage,
        tmp_dir=_config.upload.tmp_dir,
        object_prefix=_config.upload.object_prefix,
    )


def startup() -> None:
    """Prepares long-lived resources when the app starts."""
    _storage.ensure_ready()
    logger.info(
        "Gateway started",
        extra={
            "storage_backend": _config.storage.backend,
            "rate_limit_backend": _config.rate_limit.backend,
        },
    )


def shutdown() -> None:
    """Releases long-lived resources when the app stops."""
    _rate_limiter.close()
    _storage.close()
    logger.info("Gateway stopped")
