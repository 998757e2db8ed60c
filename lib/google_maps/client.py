"""
Google Maps Platform Async Client

This module provides GoogleMapsClient, the request execution engine every
endpoint goes through: validate and serialize the request, acquire rate
limiter permits, send it with retries and decode the response envelope.
"""

import dataclasses
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import httpx

from lib.rate_limiter import RateLimiterManager

from .configuration import ClientConfiguration
from .decoder import ResponseDecoder, ResponseEnvelope, ResponseSchema
from .enums import Api, TravelMode
from .exceptions import DecodeError, GoogleMapsError, TransportError, parseHttpError
from .latlng import LatLng
from .query import RequestDescriptor
from .requests import (
    DirectionsRequest,
    DistanceMatrixRequest,
    ElevationRequest,
    GeocodingRequest,
    Location,
    MapsRequest,
    PlacesNearbySearchRequest,
    PlacesNewTextSearchRequest,
    PlacesTextSearchRequest,
    ReverseGeocodingRequest,
    TimeZoneRequest,
)
from .retry import RetryExecutor

logger = logging.getLogger(__name__)


class GoogleMapsClient:
    """Async client for the Google Maps Platform web services, dood!

    One client owns one set of rate limiter buckets and may be shared by
    any number of concurrent tasks. Create it through
    ``ClientConfiguration.build()`` and close it with ``aclose()`` (or use
    it as an async context manager).

    Example:
        >>> config = ClientConfiguration("YOUR_API_KEY").withRate(Api.ALL, requests=50, perSeconds=1)
        >>> async with config.build() as client:
        ...     envelope = await client.geocode("1600 Amphitheatre Parkway, Mountain View, CA")
        ...     for result in envelope.results:
        ...         print(result["formatted_address"])
    """

    def __init__(self, config: ClientConfiguration, rateLimiter: Optional[RateLimiterManager] = None):
        """Initialize client, dood!

        Args:
            config: Client configuration, validated here
            rateLimiter: Prebuilt rate limiter manager (built from config by default)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config.validate()
        self.config = config
        self.retryPolicy = config.retryPolicy()
        self.defaultLanguage = config.defaultLanguage()
        self._rateLimiter = rateLimiter if rateLimiter is not None else config.buildRateLimiter()
        self._executor = RetryExecutor(self.retryPolicy, sleep=config.sleep)
        self._decoder = ResponseDecoder()
        self._httpClient: Optional[httpx.AsyncClient] = config.httpClient
        self._ownsHttpClient = config.httpClient is None
        self._closed = False

        logger.info(
            f"GoogleMapsClient created: {self.retryPolicy.maxAttempts} attempts, "
            f"throttled groups: {sorted(self._rateLimiter.getQueueMappings()) or 'none'}, dood!"
        )

    async def __aenter__(self) -> "GoogleMapsClient":
        return self

    async def __aexit__(self, excType, excVal, excTb) -> None:
        await self.aclose()

    @property
    def rateLimiter(self) -> RateLimiterManager:
        return self._rateLimiter

    @property
    def closed(self) -> bool:
        return self._closed

    def _getHttpClient(self) -> httpx.AsyncClient:
        """Return the HTTP client, creating a private one on first use."""
        if self._httpClient is None:
            self._httpClient = httpx.AsyncClient(timeout=self.config.timeout)
        return self._httpClient

    async def aclose(self) -> None:
        """Release the rate limiter and the private HTTP client."""
        if self._closed:
            return
        self._closed = True
        await self._rateLimiter.destroy()
        if self._ownsHttpClient and self._httpClient is not None:
            await self._httpClient.aclose()
            self._httpClient = None
        logger.info("GoogleMapsClient closed, dood!")

    def _mask(self, text: str) -> str:
        return text.replace(self.config.apiKey, "***")

    def _applyDefaults(self, request: MapsRequest) -> MapsRequest:
        """Fill in the configured default language where the request has none."""
        if self.defaultLanguage is None or not dataclasses.is_dataclass(request):
            return request
        fieldNames = {requestField.name for requestField in dataclasses.fields(request)}
        if "language" in fieldNames and getattr(request, "language") is None:
            return dataclasses.replace(request, language=self.defaultLanguage)  # type: ignore[type-var]
        return request

    def describe(self, request: MapsRequest) -> RequestDescriptor:
        """
        Validate and serialize a request without sending it.

        Raises:
            ValidationError: If the request is invalid
        """
        return self._applyDefaults(request).describe(self.config.baseUrl)

    async def execute(self, request: MapsRequest) -> ResponseEnvelope:
        """Send one request and decode its response, dood!

        Args:
            request: Any endpoint request

        Returns:
            Response envelope; ``envelope.isEmpty`` marks a valid call
            without matches

        Raises:
            ValidationError: The request is invalid (nothing was sent)
            ApiError: The server reported a non-retryable error
            DecodeError: The response could not be decoded
            TransportError: A non-retryable HTTP status was returned
            RetriesExhausted: Every attempt failed transiently
        """
        if self._closed:
            raise GoogleMapsError("Client is closed")

        descriptor = self.describe(request)
        await self._rateLimiter.initialize()

        async def acquire() -> None:
            await self._rateLimiter.applyLimits(Api.ALL, descriptor.api)

        async def attempt() -> ResponseEnvelope:
            return await self._send(descriptor, request.SCHEMA)

        return await self._executor.run(attempt, acquire=acquire, description=f"{descriptor.api} request")

    async def _send(self, descriptor: RequestDescriptor, schema: ResponseSchema) -> ResponseEnvelope:
        """Make one HTTP attempt.

        Raises:
            TransportError: Connection problem, timeout or any other request failure
            HttpStatusError: Non-2xx HTTP status
            ApiError: Error status in the envelope
            DecodeError: Malformed or undecodable body
        """
        logger.debug(f"Making {descriptor.method} request to {descriptor.maskedUrl()}")

        httpClient = self._getHttpClient()
        url = descriptor.url(self.config.apiKey)
        headers = descriptor.httpHeaders(self.config.apiKey)
        try:
            if descriptor.method == "POST":
                response = await httpClient.post(
                    url,
                    json=descriptor.body,
                    headers=headers,
                    timeout=self.config.timeout,
                )
            else:
                response = await httpClient.get(url, headers=headers, timeout=self.config.timeout)
        except httpx.TimeoutException as e:
            raise TransportError(self._mask(f"Timeout: {type(e).__name__}#{e}")) from e
        except httpx.TransportError as e:
            raise TransportError(self._mask(f"Network error: {type(e).__name__}#{e}")) from e
        except httpx.DecodingError as e:
            # Content-Encoding lies about the body, another attempt gets the same bytes
            raise DecodeError(self._mask(f"Undecodable response body: {type(e).__name__}#{e}")) from e
        except httpx.RequestError as e:
            raise TransportError(self._mask(f"Request error: {type(e).__name__}#{e}")) from e

        if not response.is_success:
            raise parseHttpError(response.status_code, self._mask(response.text))

        envelope = self._decoder.decode(response.content, schema)
        logger.debug(
            f"Request successful: {descriptor.api} {envelope.rawStatus}, "
            f"{len(envelope.results)} results, {len(envelope.elements)} elements"
        )
        return envelope

    def getStats(self, api: Api | str) -> Dict[str, Any]:
        """Rate limiter statistics of a throttled API group (see RateLimiterManager.getStats)."""
        return self._rateLimiter.getStats(str(api))

    # Convenience wrappers

    async def geocode(self, address: str, **kwargs: Any) -> ResponseEnvelope:
        return await self.execute(GeocodingRequest(address=address, **kwargs))

    async def reverseGeocode(self, latlng: LatLng, **kwargs: Any) -> ResponseEnvelope:
        return await self.execute(ReverseGeocodingRequest(latlng=latlng, **kwargs))

    async def elevation(self, *locations: LatLng) -> ResponseEnvelope:
        return await self.execute(ElevationRequest.forLocations(*locations))

    async def elevationAlongPath(self, path: Sequence[LatLng], samples: int) -> ResponseEnvelope:
        return await self.execute(ElevationRequest(path=tuple(path), samples=samples))

    async def timeZone(self, location: LatLng, timestamp: int | datetime) -> ResponseEnvelope:
        return await self.execute(TimeZoneRequest(location=location, timestamp=timestamp))

    async def distanceMatrix(
        self,
        origins: Sequence[Location],
        destinations: Sequence[Location],
        mode: Optional[TravelMode] = None,
    ) -> ResponseEnvelope:
        return await self.execute(DistanceMatrixRequest(tuple(origins), tuple(destinations), mode=mode))

    async def directions(
        self,
        origin: Location,
        destination: Location,
        mode: Optional[TravelMode] = None,
    ) -> ResponseEnvelope:
        return await self.execute(DirectionsRequest(origin, destination, mode=mode))

    async def placesTextSearch(self, query: str, **kwargs: Any) -> ResponseEnvelope:
        return await self.execute(PlacesTextSearchRequest(query=query, **kwargs))

    async def placesNearbySearch(self, location: LatLng, **kwargs: Any) -> ResponseEnvelope:
        return await self.execute(PlacesNearbySearchRequest(location=location, **kwargs))

    async def placesNewTextSearch(self, textQuery: str, **kwargs: Any) -> ResponseEnvelope:
        return await self.execute(PlacesNewTextSearchRequest(textQuery=textQuery, **kwargs))
