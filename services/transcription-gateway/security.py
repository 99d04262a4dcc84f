"""Request guards shared by the upload and transcription routes."""

import hmac
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request
from transcipio_common.logging import setup_logging

from config import AppConfig
from dependencies import get_config, get_rate_limiter
from infrastructure.interfaces import RateLimiter

logger = setup_logging()


def client_key(request: Request) -> str:
    """Identifies the caller by the first x-forwarded-for hop or the peer address."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else ""


def require_api_key(
    config: Annotated[AppConfig, Depends(get_config)],
    x_api_key: Annotated[str | None, Header()] = None,
) -> None:
    """Rejects requests whose x-api-key does not match the server secret."""
    expected = config.auth.private_api_key
    if not x_api_key or not expected or not hmac.compare_digest(x_api_key, expected):
        raise HTTPException(status_code=401, detail="Unauthorized")


def enforce_rate_limit(
    request: Request,
    limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
) -> None:
    """Rejects callers that exceeded their request allowance."""
    if limiter.is_rate_limited(client_key(request)):
        raise HTTPException(status_code=429, detail="Too many requests")


# Auth runs before the limiter so unauthenticated traffic is not counted.
guarded = [Depends(require_api_key), Depends(enforce_rate_limit)]
