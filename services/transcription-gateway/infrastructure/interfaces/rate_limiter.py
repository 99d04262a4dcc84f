"""Abstract interface for per-client rate limiting."""

from abc import ABC, abstractmethod


class RateLimiter(ABC):
    """Sliding-window request counter keyed by client address."""

    @abstractmethod
    def is_rate_limited(self, client_key: str) -> bool:
        """
        Records a request for ``client_key`` and reports whether to reject it.

        Every call counts, rejected ones included, so a client that keeps
        hammering stays limited until it backs off for a full window.

        Args:
            client_key: Caller identity, typically its network address.

        Returns:
            True if the request exceeds the window's allowance.
        """
        pass

    def close(self) -> None:
        """Releases resources held by the limiter."""
