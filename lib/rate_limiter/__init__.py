"""
Rate Limiter Library

This library provides token bucket rate limiting with support for multiple
independent queues (one per API group) and a manager that maps queues to
rate limiter backends. Queues without a binding are unthrottled.

Example:
    >>> from lib.rate_limiter import RateLimiterManager, RatePolicy
    >>>
    >>> manager = RateLimiterManager.fromPolicies(
    ...     {
    ...         "all": RatePolicy(requests=100, perSeconds=1),
    ...         "geocoding": RatePolicy(requests=50, perSeconds=1),
    ...     }
    ... )
    >>> await manager.initialize()
    >>>
    >>> await manager.applyLimits("all", "geocoding")
    >>> await manager.applyLimit("elevation")  # Unthrottled
"""

from .interface import RateLimiterInterface
from .manager import RateLimiterManager
from .token_bucket import BucketState, RatePolicy, TokenBucketRateLimiter
from .types import RateLimiterManagerConfig, RatePolicyConfig

__all__ = [
    "RateLimiterInterface",
    "RateLimiterManager",
    "TokenBucketRateLimiter",
    "RatePolicy",
    "BucketState",
    "RateLimiterManagerConfig",
    "RatePolicyConfig",
]
