"""
Google Maps Platform Client Library

This module provides an async request engine for the Google Maps Platform
web services (geocoding, reverse geocoding, elevation, time zone, distance
matrix, directions and places search) with typed requests, per API group
rate limiting, bounded retries and typed errors.

Example usage:
    from lib.google_maps import Api, ClientConfiguration, DistanceMatrixRequest, LatLng

    config = (
        ClientConfiguration(apiKey="your_api_key")
        .withRate(Api.ALL, requests=50, perSeconds=1)
        .withMaxAttempts(5)
    )

    async with config.build() as client:
        # Forward geocoding
        envelope = await client.geocode("Angarsk, Russia")

        # Reverse geocoding
        envelope = await client.reverseGeocode(LatLng(52.5443, 103.8882))

        # Batch request with per-element statuses
        envelope = await client.execute(DistanceMatrixRequest.between(["Vancouver BC"], ["San Francisco"]))
        for element in envelope.elements:
            print(element.row, element.column, element.outcome)
"""

from lib.google_maps.client import GoogleMapsClient
from lib.google_maps.configuration import ClientConfiguration, GoogleMapsConfigDict
from lib.google_maps.decoder import ElementResult, Outcome, ResponseDecoder, ResponseEnvelope, ResponseSchema
from lib.google_maps.enum_codec import EnumTable, Unrecognized, isUnrecognized
from lib.google_maps.enums import (
    Api,
    Avoid,
    ElementStatus,
    Language,
    LocationType,
    PlaceType,
    RankBy,
    Status,
    TrafficModel,
    TransitMode,
    TransitRoutePreference,
    TravelMode,
    UnitSystem,
)
from lib.google_maps.exceptions import (
    ApiError,
    ApiErrorKind,
    ConfigurationError,
    DecodeError,
    GoogleMapsError,
    HttpStatusError,
    RetriesExhausted,
    TransportError,
    ValidationError,
)
from lib.google_maps.latlng import Bounds, LatLng
from lib.google_maps.models import (
    DirectionsRoute,
    DistanceMatrixElement,
    ElevationResult,
    GeocodingResult,
    PlaceResult,
    TimeZoneResponse,
)
from lib.google_maps.query import QueryAssembler, QueryField, RequestDescriptor
from lib.google_maps.requests import (
    NOW,
    DirectionsRequest,
    DistanceMatrixRequest,
    ElevationRequest,
    GeocodingRequest,
    MapsRequest,
    PlaceId,
    PlacesNearbySearchRequest,
    PlacesNewTextSearchRequest,
    PlacesTextSearchRequest,
    ReverseGeocodingRequest,
    TimeZoneRequest,
    Waypoint,
)
from lib.google_maps.retry import RetryExecutor, RetryPolicy

__all__ = [
    "GoogleMapsClient",
    "ClientConfiguration",
    "GoogleMapsConfigDict",
    "ElementResult",
    "Outcome",
    "ResponseDecoder",
    "ResponseEnvelope",
    "ResponseSchema",
    "EnumTable",
    "Unrecognized",
    "isUnrecognized",
    "Api",
    "Avoid",
    "ElementStatus",
    "Language",
    "LocationType",
    "PlaceType",
    "RankBy",
    "Status",
    "TrafficModel",
    "TransitMode",
    "TransitRoutePreference",
    "TravelMode",
    "UnitSystem",
    "ApiError",
    "ApiErrorKind",
    "ConfigurationError",
    "DecodeError",
    "GoogleMapsError",
    "HttpStatusError",
    "RetriesExhausted",
    "TransportError",
    "ValidationError",
    "Bounds",
    "LatLng",
    "DirectionsRoute",
    "DistanceMatrixElement",
    "ElevationResult",
    "GeocodingResult",
    "PlaceResult",
    "TimeZoneResponse",
    "QueryAssembler",
    "QueryField",
    "RequestDescriptor",
    "NOW",
    "DirectionsRequest",
    "DistanceMatrixRequest",
    "ElevationRequest",
    "GeocodingRequest",
    "MapsRequest",
    "PlaceId",
    "PlacesNearbySearchRequest",
    "PlacesNewTextSearchRequest",
    "PlacesTextSearchRequest",
    "ReverseGeocodingRequest",
    "TimeZoneRequest",
    "Waypoint",
    "RetryExecutor",
    "RetryPolicy",
]
