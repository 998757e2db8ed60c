"""
Bounded exponential backoff.

:class:`RetryPolicy` is a pure function of the attempt number; the
:class:`RetryExecutor` runs one logical call through it, acquiring the rate
limiter before every attempt and retrying only errors that report
``retryable``.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from .constants import DEFAULT_BASE_DELAY, DEFAULT_MAX_ATTEMPTS, DEFAULT_MAX_DELAY
from .exceptions import GoogleMapsError, RetriesExhausted, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 2**62 seconds is far beyond any sensible maxDelay
_MAX_EXPONENT = 62


@dataclass(frozen=True)
class RetryPolicy:
    """
    Exponential backoff settings.

    Attributes:
        maxAttempts: Total attempts including the first one
        baseDelay: Delay in seconds after the first failed attempt
        maxDelay: Upper bound for any single delay
        jitter: Randomise each delay within [delay / 2, delay]
    """

    maxAttempts: int = DEFAULT_MAX_ATTEMPTS
    baseDelay: float = DEFAULT_BASE_DELAY
    maxDelay: float = DEFAULT_MAX_DELAY
    jitter: bool = False

    def __post_init__(self):
        """Validate configuration values"""
        if self.maxAttempts < 1:
            raise ValidationError("maxAttempts must be at least 1", "maxAttempts")
        if self.baseDelay < 0:
            raise ValidationError("baseDelay must not be negative", "baseDelay")
        if self.maxDelay < self.baseDelay:
            raise ValidationError("maxDelay must not be less than baseDelay", "maxDelay")

    def computeDelay(self, attempt: int, rng: Optional[random.Random] = None, floor: float = 0.0) -> float:
        """
        Delay to wait after failed attempt number ``attempt`` (1-based).

        Without jitter the schedule is ``min(baseDelay * 2**(attempt - 1), maxDelay)``,
        i.e. 1, 2, 4, 8, 16, 32, 32... for the defaults.

        Args:
            attempt: Number of the attempt that just failed, starting at 1
            rng: Random source for jitter (module level random by default)
            floor: Previous delay of the same call; jittered delays never go below it,
                so the jittered schedule stays non-decreasing
        """
        if attempt < 1:
            raise ValueError("attempt numbers start at 1")

        delay = min(self.baseDelay * (2 ** min(attempt - 1, _MAX_EXPONENT)), self.maxDelay)
        if self.jitter and delay > 0:
            delay = (rng or random).uniform(min(max(floor, delay / 2), delay), delay)
        return delay

    def schedule(self) -> List[float]:
        """Un-jittered delays between all attempts of one call."""
        return [
            min(self.baseDelay * (2 ** min(attempt - 1, _MAX_EXPONENT)), self.maxDelay)
            for attempt in range(1, self.maxAttempts)
        ]


class RetryExecutor:
    """Runs one logical call with bounded exponential backoff, dood!

    State per call: attempting, then either success, retrying (sleep and
    attempt again) or exhausted. Non-retryable errors are raised on first
    occurrence without waiting.

    Example:
        >>> executor = RetryExecutor(RetryPolicy(maxAttempts=3))
        >>> data = await executor.run(sendOnce, acquire=lambda: limiter.applyLimits("all", "geocoding"))
    """

    def __init__(
        self,
        policy: RetryPolicy,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            policy: Backoff settings
            sleep: Coroutine function used to wait between attempts (injectable for tests)
            rng: Random source for jitter
        """
        self.policy = policy
        self._sleep = sleep
        self._rng = rng

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        acquire: Optional[Callable[[], Awaitable[Any]]] = None,
        description: str = "request",
    ) -> T:
        """
        Run ``operation`` until it succeeds or the attempt budget is spent.

        Args:
            operation: Coroutine function performing one attempt
            acquire: Coroutine function awaited before every attempt (rate limiting)
            description: Short label for log messages

        Returns:
            Result of the first successful attempt

        Raises:
            GoogleMapsError: The first non-retryable error
            RetriesExhausted: After ``maxAttempts`` retryable failures
        """
        lastError: Optional[GoogleMapsError] = None
        attempt = 0
        delay = 0.0

        while attempt < self.policy.maxAttempts:
            attempt += 1
            if acquire is not None:
                await acquire()

            try:
                return await operation()
            except GoogleMapsError as e:
                if not e.retryable:
                    raise
                lastError = e

            if attempt < self.policy.maxAttempts:
                delay = self.policy.computeDelay(attempt, self._rng, floor=delay)
                logger.warning(
                    f"{description} failed on attempt {attempt}/{self.policy.maxAttempts}: "
                    f"{type(lastError).__name__}#{lastError}, retrying in {delay:.2f} seconds, dood!"
                )
                await self._sleep(delay)

        if lastError is None:
            raise GoogleMapsError(f"{description} made no attempts, maxAttempts={self.policy.maxAttempts}")
        logger.error(f"{description} failed after {attempt} attempts: {type(lastError).__name__}#{lastError}")
        raise RetriesExhausted(attempt, lastError) from lastError
