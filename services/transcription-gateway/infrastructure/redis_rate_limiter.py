"""Redis implementation of the RateLimiter interface."""

import time
import uuid
from collections.abc import Callable

import redis
from transcipio_common.logging import setup_logging

from exceptions import RateLimiterError
from infrastructure.interfaces import RateLimiter

logger = setup_logging()


class RedisRateLimiter(RateLimiter):
    """
    Sliding-window limiter shared by every gateway instance.

    Each client key is a sorted set of request timestamps. Trimming,
    recording and counting run in one MULTI/EXEC transaction, and the key
    expires one window after its last request. If Redis is unreachable the
    request is allowed and the failure is logged.
    """

    def __init__(
        self,
        client: redis.Redis,
        window_seconds: float,
        max_requests: int,
        key_prefix: str = "ratelimit:",
        clock: Callable[[], float] = time.time,
    ):
        self._client = client
        self._window_seconds = window_seconds
        self._max_requests = max_requests
        self._key_prefix = key_prefix
        self._clock = clock

    def is_rate_limited(self, client_key: str) -> bool:
        if not client_key:
            return False

        try:
            count = self._record(client_key)
        except RateLimiterError:
            logger.exception(
                "Rate limit check failed, allowing request",
                extra={"client_key": client_key},
            )
            return False

        limited = count > self._max_requests
        if limited:
            logger.info(
                "Rate limit exceeded",
                extra={"client_key": client_key, "count": count},
            )
        return limited

    def _record(self, client_key: str) -> int:
        key = f"{self._key_prefix}{client_key}"
        now = self._clock()
        window_start = now - self._window_seconds
        # Members must be unique even when two requests share a timestamp.
        member = f"{now:.6f}:{uuid.uuid4().hex}"
        try:
            pipe = self._client.pipeline(transaction=True)
            pipe.zremrangebyscore(key, "-inf", window_start)
            pipe.zadd(key, {member: now})
            pipe.zcard(key)
            pipe.expire(key, max(1, int(self._window_seconds)))
            _, _, count, _ = pipe.execute()
            return int(count)
        except redis.RedisError as e:
            raise RateLimiterError(client_key, e) from e

    def close(self) -> None:
        self._client.close()
