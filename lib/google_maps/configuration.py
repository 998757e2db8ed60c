"""
Client configuration.

:class:`ClientConfiguration` is an immutable value assembled through pure
``with*`` transformations. Nothing is checked until ``build()``, which
validates every setting and returns a :class:`GoogleMapsClient` owning
its own rate limiter buckets.
"""

import asyncio
import logging
import sys
import time
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Mapping, NotRequired, Optional, Tuple, Union

import httpx

from lib.rate_limiter import RateLimiterManager, RatePolicy, RatePolicyConfig

from .constants import API_BASE_URL, DEFAULT_BASE_DELAY, DEFAULT_MAX_ATTEMPTS, DEFAULT_MAX_DELAY, DEFAULT_TIMEOUT
from .enums import API_GROUPS, LANGUAGES, Api, Language
from .exceptions import ConfigurationError, ValidationError
from .retry import RetryPolicy

if sys.version_info >= (3, 14):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict

if TYPE_CHECKING:
    from .client import GoogleMapsClient

logger = logging.getLogger(__name__)


RetryConfigDict = TypedDict(
    "RetryConfigDict",
    {
        "max-attempts": int,
        "base-delay": float,
        "max-delay": float,
        "jitter": bool,
    },
    total=False,
)

# [google-maps] section of the TOML configuration
GoogleMapsConfigDict = TypedDict(
    "GoogleMapsConfigDict",
    {
        "api-key": str,
        "timeout": NotRequired[float],
        "language": NotRequired[str],
        "base-url": NotRequired[str],
        "retry": NotRequired[RetryConfigDict],
        "ratelimits": NotRequired[Dict[str, RatePolicyConfig]],
    },
)


@dataclass(frozen=True)
class ClientConfiguration:
    """Settings shared by every request of one client, dood!

    Attributes:
        apiKey: Credential appended to every request as ``key=``
        rateLimits: API group -> (requests, perSeconds); unlisted groups are unthrottled
        maxAttempts: Attempts per call, including the first one
        baseDelay: Backoff delay after the first failure, in seconds
        maxDelay: Upper bound for a single backoff delay
        jitter: Randomise backoff delays
        timeout: Per attempt HTTP timeout, in seconds
        language: Default language for requests that do not set one
        baseUrl: API root, overridable for tests and proxies
        httpClient: Externally owned httpx client (a private one is created otherwise)
        sleep: Coroutine function used for backoff and rate limiter waits
        clock: Monotonic time source for the rate limiter

    Example:
        >>> client = (
        ...     ClientConfiguration("YOUR_API_KEY")
        ...     .withRate(Api.ALL, requests=50, perSeconds=1)
        ...     .withRate(Api.DIRECTIONS, requests=1, perSeconds=2)
        ...     .withMaxAttempts(5)
        ...     .build()
        ... )
    """

    apiKey: str
    rateLimits: Mapping[str, Tuple[int, float]] = field(default_factory=dict)
    maxAttempts: int = DEFAULT_MAX_ATTEMPTS
    baseDelay: float = DEFAULT_BASE_DELAY
    maxDelay: float = DEFAULT_MAX_DELAY
    jitter: bool = False
    timeout: float = DEFAULT_TIMEOUT
    language: Optional[Union[Language, str]] = None
    baseUrl: str = API_BASE_URL
    httpClient: Optional[httpx.AsyncClient] = field(default=None, repr=False, compare=False)
    sleep: Callable[[float], Awaitable[Any]] = field(default=asyncio.sleep, repr=False, compare=False)
    clock: Callable[[], float] = field(default=time.monotonic, repr=False, compare=False)

    def __repr__(self) -> str:
        # Never print the credential
        return (
            f"ClientConfiguration(apiKey='***', rateLimits={dict(self.rateLimits)}, "
            f"maxAttempts={self.maxAttempts}, baseDelay={self.baseDelay}, maxDelay={self.maxDelay}, "
            f"jitter={self.jitter}, timeout={self.timeout}, language={self.language!r}, baseUrl={self.baseUrl!r})"
        )

    def withRate(self, api: Union[Api, str], requests: int, perSeconds: float) -> "ClientConfiguration":
        """Throttle an API group (or ``all``) to ``requests`` calls per ``perSeconds`` seconds."""
        rateLimits = dict(self.rateLimits)
        rateLimits[str(api)] = (requests, perSeconds)
        return replace(self, rateLimits=rateLimits)

    def withRetryPolicy(self, policy: RetryPolicy) -> "ClientConfiguration":
        return replace(
            self,
            maxAttempts=policy.maxAttempts,
            baseDelay=policy.baseDelay,
            maxDelay=policy.maxDelay,
            jitter=policy.jitter,
        )

    def withMaxAttempts(self, maxAttempts: int) -> "ClientConfiguration":
        return replace(self, maxAttempts=maxAttempts)

    def withBaseDelay(self, baseDelay: float) -> "ClientConfiguration":
        return replace(self, baseDelay=baseDelay)

    def withMaxDelay(self, maxDelay: float) -> "ClientConfiguration":
        return replace(self, maxDelay=maxDelay)

    def withJitter(self, jitter: bool = True) -> "ClientConfiguration":
        return replace(self, jitter=jitter)

    def withTimeout(self, timeout: float) -> "ClientConfiguration":
        return replace(self, timeout=timeout)

    def withLanguage(self, language: Union[Language, str, None]) -> "ClientConfiguration":
        return replace(self, language=language)

    def withBaseUrl(self, baseUrl: str) -> "ClientConfiguration":
        return replace(self, baseUrl=baseUrl.rstrip("/"))

    def withHttpClient(self, httpClient: httpx.AsyncClient) -> "ClientConfiguration":
        """Use a caller owned httpx client; the caller keeps responsibility for closing it."""
        return replace(self, httpClient=httpClient)

    def withClock(
        self,
        clock: Callable[[], float],
        sleep: Callable[[float], Awaitable[Any]],
    ) -> "ClientConfiguration":
        """Replace time source and sleep (tests drive time without waiting)."""
        return replace(self, clock=clock, sleep=sleep)

    def retryPolicy(self) -> RetryPolicy:
        """
        Raises:
            ConfigurationError: If the retry settings are invalid
        """
        try:
            return RetryPolicy(
                maxAttempts=self.maxAttempts,
                baseDelay=self.baseDelay,
                maxDelay=self.maxDelay,
                jitter=self.jitter,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid retry policy: {e}") from e

    def ratePolicies(self) -> Dict[str, RatePolicy]:
        """
        Raises:
            ConfigurationError: If an API group is unknown or a limit is not positive
        """
        policies: Dict[str, RatePolicy] = {}
        for api, (requests, perSeconds) in self.rateLimits.items():
            if api not in API_GROUPS:
                raise ConfigurationError(
                    f"Unknown API group '{api}', expected one of: {', '.join(API_GROUPS.tokens())}"
                )
            try:
                policies[str(API_GROUPS.parse(api).value)] = RatePolicy(requests=requests, perSeconds=perSeconds)
            except ValueError as e:
                raise ConfigurationError(f"Invalid rate limit for '{api}': {e}") from e
        return policies

    def defaultLanguage(self) -> Optional[Language]:
        """
        Raises:
            ConfigurationError: If the language is not a known code
        """
        if self.language is None or isinstance(self.language, Language):
            return self.language
        try:
            return LANGUAGES.parse(self.language)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def validate(self) -> None:
        """
        Check every setting.

        Raises:
            ConfigurationError: On the first invalid setting
        """
        if not isinstance(self.apiKey, str) or not self.apiKey.strip():
            raise ConfigurationError("API key must not be empty")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if not self.baseUrl.startswith(("http://", "https://")):
            raise ConfigurationError(f"Invalid base URL '{self.baseUrl}'")
        self.retryPolicy()
        self.ratePolicies()
        self.defaultLanguage()

    def buildRateLimiter(self) -> RateLimiterManager:
        return RateLimiterManager.fromPolicies(self.ratePolicies(), clock=self.clock, sleep=self.sleep)

    def build(self) -> "GoogleMapsClient":
        """
        Validate the configuration and create a client.

        Raises:
            ConfigurationError: If any setting is invalid
        """
        from .client import GoogleMapsClient

        return GoogleMapsClient(self)

    @classmethod
    def fromDict(cls, section: GoogleMapsConfigDict) -> "ClientConfiguration":
        """
        Create configuration from the ``[google-maps]`` TOML section.

        Example section:
            [google-maps]
            api-key = "${GOOGLE_MAPS_API_KEY}"
            timeout = 10
            language = "en"

            [google-maps.retry]
            max-attempts = 4
            base-delay = 1.0
            max-delay = 32.0
            jitter = false

            [google-maps.ratelimits.all]
            requests = 50
            per-seconds = 1

        Raises:
            ConfigurationError: If a key is missing or has the wrong type
        """
        try:
            config = cls(apiKey=str(section["api-key"]))
            if "timeout" in section:
                config = config.withTimeout(float(section["timeout"]))
            if section.get("language"):
                config = config.withLanguage(section["language"])
            if "base-url" in section:
                config = config.withBaseUrl(section["base-url"])

            retry = section.get("retry", {})
            config = replace(
                config,
                maxAttempts=int(retry.get("max-attempts", config.maxAttempts)),
                baseDelay=float(retry.get("base-delay", config.baseDelay)),
                maxDelay=float(retry.get("max-delay", config.maxDelay)),
                jitter=bool(retry.get("jitter", config.jitter)),
            )

            policies = RateLimiterManager.parseConfig({"queues": section.get("ratelimits", {})})
            for api, policy in policies.items():
                config = config.withRate(api, policy.requests, policy.perSeconds)
        except KeyError as e:
            raise ConfigurationError(f"Missing google-maps configuration key {e}") from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid google-maps configuration: {e}") from e

        logger.debug(f"Loaded google-maps configuration: {config}")
        return config
