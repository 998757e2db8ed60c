"""
Google Maps Platform Data Models

TypedDict shapes of the result records found in decoded envelopes
(``ResponseEnvelope.results``, ``ElementResult.data``). Only the commonly
used fields are declared; responses may carry more.
"""

import sys
from typing import List, NotRequired

if sys.version_info >= (3, 14):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict


class LatLngLiteral(TypedDict):
    """Coordinates as they appear in responses, dood!"""

    lat: float
    lng: float


class Viewport(TypedDict):
    northeast: LatLngLiteral
    southwest: LatLngLiteral


class TextValue(TypedDict):
    """Human readable text plus the machine value (meters, seconds)."""

    text: str
    value: float


class AddressComponent(TypedDict):
    long_name: str
    short_name: str
    types: List[str]


class Geometry(TypedDict):
    location: LatLngLiteral
    location_type: NotRequired[str]  # ROOFTOP, RANGE_INTERPOLATED, GEOMETRIC_CENTER or APPROXIMATE
    viewport: NotRequired[Viewport]
    bounds: NotRequired[Viewport]


class PlusCode(TypedDict, total=False):
    global_code: str
    compound_code: str


class GeocodingResult(TypedDict):
    """One result of forward or reverse geocoding, dood!"""

    address_components: List[AddressComponent]
    formatted_address: str
    geometry: Geometry
    place_id: str
    types: List[str]
    partial_match: NotRequired[bool]
    plus_code: NotRequired[PlusCode]
    postcode_localities: NotRequired[List[str]]


class ElevationResult(TypedDict):
    elevation: float  # Meters above sea level
    location: LatLngLiteral
    resolution: float  # Meters between interpolated data points


class TimeZoneResponse(TypedDict, total=False):
    """Time Zone API answer; the envelope itself is the result."""

    status: str
    dstOffset: int  # Seconds
    rawOffset: int  # Seconds
    timeZoneId: str  # IANA identifier such as "America/Los_Angeles"
    timeZoneName: str
    errorMessage: str


class DistanceMatrixElement(TypedDict):
    """One origin/destination pair of a distance matrix."""

    status: str
    distance: NotRequired[TextValue]
    duration: NotRequired[TextValue]
    duration_in_traffic: NotRequired[TextValue]
    fare: NotRequired[dict]


class DistanceMatrixRow(TypedDict):
    elements: List[DistanceMatrixElement]


class GeocodedWaypoint(TypedDict):
    geocoder_status: str  # OK or ZERO_RESULTS
    place_id: NotRequired[str]
    types: NotRequired[List[str]]
    partial_match: NotRequired[bool]


class DirectionsLeg(TypedDict):
    distance: TextValue
    duration: TextValue
    start_address: str
    end_address: str
    start_location: LatLngLiteral
    end_location: LatLngLiteral
    steps: List[dict]


class DirectionsRoute(TypedDict):
    summary: str
    legs: List[DirectionsLeg]
    overview_polyline: dict
    bounds: Viewport
    copyrights: str
    warnings: List[str]
    waypoint_order: List[int]


class PlaceResult(TypedDict, total=False):
    """Place search result; every field is optional."""

    place_id: str
    name: str
    formatted_address: str
    vicinity: str
    geometry: Geometry
    types: List[str]
    rating: float
    user_ratings_total: int
    price_level: int
    business_status: str
