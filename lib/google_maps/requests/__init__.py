"""
Endpoint requests.

Each request is a frozen dataclass with ``with*`` transformations that
declares its query fields and cross-field rules for the QueryAssembler.
"""

from .base import JsonBodyRequest, MapsRequest
from .common import NOW, Location, PlaceId, Waypoint, WaypointList
from .directions import DirectionsRequest
from .distance_matrix import DistanceMatrixRequest
from .elevation import ElevationRequest
from .geocoding import GeocodingRequest, ReverseGeocodingRequest
from .places import PlacesNearbySearchRequest, PlacesTextSearchRequest
from .places_new import PlacesNewTextSearchRequest
from .time_zone import TimeZoneRequest

__all__ = [
    "MapsRequest",
    "JsonBodyRequest",
    "NOW",
    "Location",
    "PlaceId",
    "Waypoint",
    "WaypointList",
    "DirectionsRequest",
    "DistanceMatrixRequest",
    "ElevationRequest",
    "GeocodingRequest",
    "ReverseGeocodingRequest",
    "PlacesTextSearchRequest",
    "PlacesNearbySearchRequest",
    "PlacesNewTextSearchRequest",
    "TimeZoneRequest",
]
