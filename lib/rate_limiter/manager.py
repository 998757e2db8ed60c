import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from .interface import RateLimiterInterface
from .token_bucket import RatePolicy, TokenBucketRateLimiter
from .types import RateLimiterManagerConfig

logger = logging.getLogger(__name__)


class RateLimiterManager:
    """
    Registry of rate limiter instances with queue-to-limiter mapping.

    One manager is owned by each client, so every client instance keeps its
    own buckets for its whole lifetime. Queues map API groups (``geocoding``,
    ``directions``, ``all``...) to named rate limiter backends.

    Architecture:
        - Manages multiple named rate limiter instances (backends)
        - Maps queues to specific rate limiters
        - Queues without a binding are unthrottled

    Usage:
        >>> manager = RateLimiterManager()
        >>> limiter = TokenBucketRateLimiter(RatePolicy(requests=50, perSeconds=1))
        >>> manager.registerRateLimiter("geocoding", limiter)
        >>> manager.bindQueue("geocoding", "geocoding")
        >>> await manager.initialize()
        >>>
        >>> await manager.applyLimit("geocoding")  # Uses token bucket
        >>> await manager.applyLimit("elevation")  # Unbound, returns at once
    """

    def __init__(self):
        """
        Initialize the manager instance.

        Sets up:
        - Rate limiter registry (name -> instance)
        - Queue mappings (queue -> limiter name)
        """
        self._rateLimiters: Dict[str, RateLimiterInterface] = {}
        self._queueMappings: Dict[str, str] = {}
        self._initialized = False

    @classmethod
    def fromPolicies(
        cls,
        policies: Mapping[str, RatePolicy],
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> "RateLimiterManager":
        """
        Create a manager with one token bucket limiter per queue.

        Args:
            policies: Mapping of queue name to its rate policy
            clock: Monotonic time source passed to every limiter
            sleep: Coroutine function passed to every limiter

        Returns:
            New RateLimiterManager with every queue bound to its own limiter
        """
        manager = cls()
        for queue, policy in policies.items():
            manager.registerRateLimiter(queue, TokenBucketRateLimiter(policy, clock=clock, sleep=sleep))
            manager.bindQueue(queue, queue)
        return manager

    @staticmethod
    def parseConfig(config: RateLimiterManagerConfig) -> Dict[str, RatePolicy]:
        """
        Convert configuration dictionary into rate policies.

        Args:
            config: Dictionary with ``queues`` mapping queue names to
                ``{"requests": N, "per-seconds": T}``

        Returns:
            Mapping of queue name to RatePolicy

        Raises:
            ValueError: If a policy is missing a key or has a non-positive value
        """
        policies: Dict[str, RatePolicy] = {}
        for queueName, policyConfig in config.get("queues", {}).items():
            try:
                policies[queueName] = RatePolicy(
                    requests=int(policyConfig["requests"]),
                    perSeconds=float(policyConfig["per-seconds"]),
                )
            except KeyError as e:
                raise ValueError(f"Rate limit for queue '{queueName}' is missing key {e}") from e
        return policies

    async def initialize(self) -> None:
        """Initialize every registered rate limiter once."""
        if self._initialized:
            return

        for limiter in self._rateLimiters.values():
            await limiter.initialize()
        self._initialized = True

    def registerRateLimiter(self, name: str, limiter: RateLimiterInterface) -> None:
        """
        Register a rate limiter instance with a name.

        Args:
            name: Unique name for this rate limiter backend
            limiter: Rate limiter instance to register

        Raises:
            ValueError: If name is already registered
        """
        if name in self._rateLimiters:
            raise ValueError(f"Rate limiter '{name}' is already registered")

        self._rateLimiters[name] = limiter
        logger.info(f"Registered rate limiter {type(limiter).__name__} with name '{name}', dood!")

    def bindQueue(self, queue: str, limiterName: str) -> None:
        """
        Bind a queue to a specific rate limiter.

        Args:
            queue: Name of the queue to bind
            limiterName: Name of the rate limiter to use for this queue

        Raises:
            ValueError: If the rate limiter name is not registered
        """
        if limiterName not in self._rateLimiters:
            raise ValueError(f"Rate limiter '{limiterName}' is not registered")

        self._queueMappings[queue] = limiterName
        logger.info(f"Bound queue '{queue}' to rate limiter '{limiterName}', dood!")

    def _getLimiterForQueue(self, queue: str) -> Optional[RateLimiterInterface]:
        """
        Get the rate limiter bound to a queue (internal helper).

        Returns:
            Rate limiter instance, or None if the queue is unthrottled
        """
        limiterName = self._queueMappings.get(queue)
        if limiterName is None:
            return None
        return self._rateLimiters[limiterName]

    def isThrottled(self, queue: str) -> bool:
        return queue in self._queueMappings

    async def applyLimit(self, queue: str = "default") -> None:
        """
        Apply rate limiting for the specified queue.

        Routes the request to the rate limiter bound to the queue. Unbound
        queues are unthrottled and return immediately.

        Args:
            queue: Name of the queue to apply rate limiting to
        """
        limiter = self._getLimiterForQueue(queue)
        if limiter is None:
            return
        await limiter.applyLimit(queue)

    async def release(self, queue: str = "default") -> None:
        """Return a permit taken by applyLimit(); unbound queues have nothing to return."""
        limiter = self._getLimiterForQueue(queue)
        if limiter is None:
            return
        await limiter.release(queue)

    async def applyLimits(self, *queues: str) -> None:
        """
        Apply rate limiting for several queues, in the given order.

        If the caller is cancelled while waiting on a later queue, the
        permits already taken from earlier queues are given back.

        Example:
            >>> await manager.applyLimits("all", "geocoding")
        """
        acquired: List[str] = []
        try:
            for queue in queues:
                await self.applyLimit(queue)
                acquired.append(queue)
        except asyncio.CancelledError:
            for queue in reversed(acquired):
                await self.release(queue)
            logger.debug(f"Cancelled while waiting on {queues}, returned permits of {acquired}, dood!")
            raise

    def getStats(self, queue: str = "default") -> Dict[str, Any]:
        """
        Get rate limiting statistics for a queue.

        Args:
            queue: Name of the queue to get statistics for

        Returns:
            Dictionary containing rate limit statistics

        Raises:
            ValueError: If the queue is unbound or has not been used yet
        """
        limiter = self._getLimiterForQueue(queue)
        if limiter is None:
            raise ValueError(f"Queue '{queue}' is not bound to any rate limiter")
        return limiter.getStats(queue)

    def listRateLimiters(self) -> List[str]:
        """
        Get list of all registered rate limiter names.

        Returns:
            List of rate limiter names
        """
        return list(self._rateLimiters.keys())

    def getQueueMappings(self) -> Dict[str, str]:
        """
        Get all queue-to-limiter mappings.

        Returns:
            Dictionary mapping queue names to rate limiter names
        """
        return self._queueMappings.copy()

    async def destroy(self) -> None:
        """
        Destroy all registered rate limiters and clean up.

        This method:
        1. Calls destroy() on each registered rate limiter
        2. Clears all rate limiter registrations
        3. Clears all queue mappings

        Should be called when the owning client is closed.
        """
        logger.info("Destroying all rate limiters, dood!")

        for name, limiter in self._rateLimiters.items():
            try:
                await limiter.destroy()
                logger.info(f"Destroyed rate limiter '{name}', dood!")
            except Exception as e:
                logger.error(f"Error destroying rate limiter '{name}': {e}")

        self._rateLimiters.clear()
        self._queueMappings.clear()
        self._initialized = False

        logger.info("RateLimiterManager cleanup complete, dood!")
