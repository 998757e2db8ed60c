"""Type definitions for the rate limiter library."""

import sys
from typing import Dict, NotRequired

if sys.version_info >= (3, 14):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict


# Rate limit for one queue as it appears in the TOML config:
#   requests: Number of calls permitted per interval
#   per-seconds: Interval length in seconds
RatePolicyConfig = TypedDict(
    "RatePolicyConfig",
    {
        "requests": int,
        "per-seconds": float,
    },
)


class RateLimiterManagerConfig(TypedDict, closed=False):
    """Configuration for the rate limiter manager.

    Attributes:
        queues: Dictionary mapping queue (API group) names to their policies
    """

    queues: NotRequired[Dict[str, RatePolicyConfig]]
