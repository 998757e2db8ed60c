import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List

from .interface import RateLimiterInterface

logger = logging.getLogger(__name__)

# Tolerance for float drift after a computed wait
_EPSILON = 1e-9


@dataclass(frozen=True)
class RatePolicy:
    """
    Rate limit for a single queue: `requests` calls per `perSeconds` seconds.

    Attributes:
        requests: Bucket capacity, i.e. calls permitted per interval
        perSeconds: Interval in seconds over which the bucket refills completely
    """

    requests: int
    perSeconds: float

    def __post_init__(self):
        """Validate configuration values"""
        if self.requests <= 0:
            raise ValueError("requests must be positive")
        if self.perSeconds <= 0:
            raise ValueError("perSeconds must be positive")

    @property
    def refillRate(self) -> float:
        """Tokens added per second."""
        return self.requests / self.perSeconds


@dataclass
class BucketState:
    """Mutable state of one bucket. Only TokenBucketRateLimiter touches it."""

    tokens: float
    lastRefill: float


class TokenBucketRateLimiter(RateLimiterInterface):
    """
    Token bucket rate limiter implementation.

    Every queue owns a bucket holding up to `policy.requests` tokens which
    refills continuously at `policy.requests / policy.perSeconds` tokens per
    second. Each admitted call spends one token. A new bucket starts full, so
    a burst of up to `requests` calls passes without waiting.

    Algorithm:
        1. Refill the bucket by elapsed time * refill rate, capped at capacity
        2. If at least one token is available, spend it and return
        3. Otherwise sleep until one token has accumulated and repeat

    Concurrency:
        Steps 1 and 2 run with no await in between, so two tasks can never
        spend the same token. An asyncio.Lock per queue serialises waiters,
        and a task cancelled while sleeping leaves without spending anything.

    Example:
        >>> limiter = TokenBucketRateLimiter(RatePolicy(requests=50, perSeconds=1))
        >>> await limiter.initialize()
        >>> await limiter.applyLimit("geocoding")
    """

    def __init__(
        self,
        policy: RatePolicy,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize the token bucket rate limiter.

        Args:
            policy: Rate limit to apply to every queue of this limiter
            clock: Monotonic time source in seconds (injectable for tests)
            sleep: Coroutine function used to wait (injectable for tests)
        """
        self._policy = policy
        self._clock = clock
        self._sleep = sleep
        self._buckets: Dict[str, BucketState] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._initialized = False

    @property
    def policy(self) -> RatePolicy:
        return self._policy

    async def initialize(self) -> None:
        """
        Initialize the rate limiter.

        Queues are registered dynamically on first use.
        """
        if self._initialized:
            logger.warning("TokenBucketRateLimiter already initialized")
            return

        self._initialized = True
        logger.info(
            f"TokenBucketRateLimiter initialized with "
            f"{self._policy.requests} requests per "
            f"{self._policy.perSeconds} seconds, dood!"
        )

    async def destroy(self) -> None:
        """
        Clean up rate limiter resources.

        Clears all buckets and resets state.
        """
        self._buckets.clear()
        self._locks.clear()
        self._initialized = False
        logger.info("TokenBucketRateLimiter destroyed, dood!")

    def _ensureQueue(self, queue: str) -> None:
        """
        Ensure queue is registered (internal helper).

        Args:
            queue: Queue name to ensure exists
        """
        if queue not in self._buckets:
            self._buckets[queue] = BucketState(tokens=float(self._policy.requests), lastRefill=self._clock())
            self._locks[queue] = asyncio.Lock()
            logger.debug(f"Auto-registered queue '{queue}', dood!")

    def _refill(self, bucket: BucketState, now: float) -> None:
        """Add tokens for the time elapsed since the last refill."""
        elapsed = max(0.0, now - bucket.lastRefill)
        bucket.tokens = min(float(self._policy.requests), bucket.tokens + elapsed * self._policy.refillRate)
        bucket.lastRefill = now

    def _tryAcquire(self, bucket: BucketState) -> float:
        """
        Refill, then spend one token if available.

        Returns:
            0.0 if a token was spent, otherwise seconds until one is available
        """
        self._refill(bucket, self._clock())
        if bucket.tokens >= 1.0 - _EPSILON:
            bucket.tokens = max(0.0, bucket.tokens - 1.0)
            return 0.0
        return (1.0 - bucket.tokens) / self._policy.refillRate

    async def applyLimit(self, queue: str = "default") -> None:
        """
        Admit one call for the specified queue, waiting if the bucket is empty.

        Args:
            queue: Name of the queue to apply rate limiting to.
                   Auto-registered on first use.

        Example:
            >>> await limiter.applyLimit("directions")  # May sleep if bucket is empty
        """
        self._ensureQueue(queue)
        bucket = self._buckets[queue]

        async with self._locks[queue]:
            while True:
                waitTime = self._tryAcquire(bucket)
                if waitTime <= 0:
                    return

                logger.debug(f"Rate limit reached for queue '{queue}', waiting {waitTime:.3f} seconds, dood!")
                await self._sleep(waitTime)

    async def release(self, queue: str = "default") -> None:
        """
        Return one token to the queue's bucket, never above capacity.

        Used when a call admitted here is abandoned before it is sent, so
        the token is not lost.

        Args:
            queue: Name of the queue to return the token to
        """
        if queue not in self._buckets:
            return

        bucket = self._buckets[queue]
        self._refill(bucket, self._clock())
        bucket.tokens = min(float(self._policy.requests), bucket.tokens + 1.0)
        logger.debug(f"Returned a token to queue '{queue}', {bucket.tokens:.3f} available, dood!")

    def getStats(self, queue: str = "default") -> Dict[str, Any]:
        """
        Get current rate limiting statistics for a queue.

        Args:
            queue: Name of the queue to get statistics for

        Returns:
            Dictionary containing:
            - tokensAvailable: Tokens currently in the bucket
            - maxRequests: Bucket capacity
            - windowSeconds: Time to refill an empty bucket
            - refillRate: Tokens added per second
            - utilizationPercent: Percentage of capacity spent (0-100)

        Raises:
            ValueError: If the queue doesn't exist
        """
        if queue not in self._buckets:
            raise ValueError(f"Queue '{queue}' does not exist")

        bucket = self._buckets[queue]
        self._refill(bucket, self._clock())
        capacity = float(self._policy.requests)

        return {
            "tokensAvailable": bucket.tokens,
            "maxRequests": self._policy.requests,
            "windowSeconds": self._policy.perSeconds,
            "refillRate": self._policy.refillRate,
            "utilizationPercent": (capacity - bucket.tokens) / capacity * 100,
        }

    def listQueues(self) -> List[str]:
        """
        Get list of all known queues.

        Returns:
            List of queue names that have been used
        """
        return list(self._buckets.keys())
