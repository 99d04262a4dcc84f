"""Shared configuration models for infrastructure components."""

from pydantic import BaseModel


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    bucket_name: str = "uploads"
    secure: bool = False
    url_expiry_seconds: int = 3600


class RedisConfig(BaseModel, frozen=True):
    """Redis connection configuration."""

    host: str
    port: int = 6379
    db: int = 0
