from abc import ABC, abstractmethod
from typing import Any, Dict, List


class RateLimiterInterface(ABC):
    """
    Abstract base class for rate limiter implementations.

    A rate limiter admits outgoing calls per named queue (one queue per
    logical API group). Queues are registered on first use and share the
    configuration of the limiter instance that owns them.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the rate limiter.

        Called once before the first applyLimit() call.
        """
        pass

    @abstractmethod
    async def destroy(self) -> None:
        """
        Release all per-queue state.

        Called when the owning client is closed.
        """
        pass

    @abstractmethod
    async def applyLimit(self, queue: str = "default") -> None:
        """
        Admit one call for the specified queue.

        Returns immediately when a permit is available, otherwise suspends
        the calling task until one becomes available. Cancelling the caller
        while it waits must not consume a permit.

        Args:
            queue: Name of the queue (API group) to admit a call for.
                   Auto-registered if not seen before.
        """
        pass

    @abstractmethod
    async def release(self, queue: str = "default") -> None:
        """
        Give back one permit taken by applyLimit() for a call that never ran.

        Args:
            queue: Name of the queue the permit was taken from
        """
        pass

    @abstractmethod
    def getStats(self, queue: str = "default") -> Dict[str, Any]:
        """
        Get current rate limiting statistics for a queue.

        Args:
            queue: Name of the queue to get statistics for

        Returns:
            Dictionary with limiter specific statistics, at least:
            - maxRequests: Permits granted per interval
            - windowSeconds: Interval duration in seconds
            - utilizationPercent: Share of capacity currently spent (0-100)

        Raises:
            ValueError: If the queue doesn't exist
        """
        pass

    @abstractmethod
    def listQueues(self) -> List[str]:
        """
        Get list of all known queues managed by this rate limiter.

        Returns:
            List of queue names that have been used with this limiter

        Example:
            >>> limiter.listQueues()
            ['all', 'geocoding']
        """
        pass
