"""
Rate limiting implementation for outbound chat messages.
"""

import logging
import threading
import time

logger = logging.getLogger(__name__)


class TokenBucketRateLimiter:
    """
    Non-blocking token bucket rate limiter.

    Up to ``capacity`` tokens are available immediately and the bucket is
    refilled continuously at ``rate`` tokens per second. Callers that find
    the bucket empty are refused rather than made to wait.
    """

    DEFAULT_RATE = 1.0
    DEFAULT_CAPACITY = 50

    def __init__(
        self, rate: float = DEFAULT_RATE, capacity: int = DEFAULT_CAPACITY
    ) -> None:
        """
        Initialize a token bucket rate limiter.

        Args:
            rate: Tokens per second refill rate
            capacity: Maximum number of tokens in the bucket (burst size)
        """
        if rate <= 0:
            raise ValueError("rate must be positive")
        if capacity <= 0:
            raise ValueError("capacity must be positive")

        self.rate = rate
        self.capacity = capacity
        self.tokens = float(capacity)
        self.last_refill = time.monotonic()
        self.lock = threading.Lock()

        logger.debug(
            f"TokenBucketRateLimiter initialized: {rate} tokens/sec, capacity {capacity}"
        )

    def _refill_tokens(self) -> None:
        """Refill tokens based on elapsed time."""
        current_time = time.monotonic()
        elapsed = current_time - self.last_refill

        self.tokens = min(self.capacity, self.tokens + elapsed * self.rate)
        self.last_refill = current_time

    def allow(self) -> bool:
        """
        Consume one token if available.

        Returns:
            True if a token was consumed, False if the bucket is empty
        """
        with self.lock:
            self._refill_tokens()

            if self.tokens >= 1:
                self.tokens -= 1
                return True

            logger.debug(f"No tokens available, have {self.tokens:.2f}")
            return False

    def reset(self) -> None:
        """Refill the bucket to full capacity."""
        with self.lock:
            self.tokens = float(self.capacity)
            self.last_refill = time.monotonic()

    def get_status(self) -> dict:
        """Get token bucket status."""
        with self.lock:
            self._refill_tokens()

            return {
                "rate": self.rate,
                "capacity": self.capacity,
                "current_tokens": self.tokens,
            }

    def __repr__(self) -> str:
        """String representation of the token bucket rate limiter."""
        return f"TokenBucketRateLimiter(rate={self.rate}/s, capacity={self.capacity})"
