"""
Geocoding API requests (forward and reverse).

https://developers.google.com/maps/documentation/geocoding/requests-geocoding
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Union

from ..constants import ENDPOINT_GEOCODE
from ..enums import LANGUAGES, LOCATION_TYPES, PLACE_TYPES, Api, Language, LocationType, PlaceType
from ..latlng import Bounds, LatLng
from ..query import (
    QueryAssembler,
    QueryField,
    atLeastOneOf,
    eachItem,
    exactlyOneOf,
    mutuallyExclusive,
    nonEmptyString,
    pipeJoined,
)
from .base import MapsRequest
from .common import (
    enumTuple,
    memberOf,
    serializeComponents,
    toMember,
    validateComponents,
    validateLatLng,
    validateRegion,
)


def isBounds(value: Any) -> Optional[str]:
    return None if isinstance(value, Bounds) else f"must be Bounds, got {type(value).__name__}"


@dataclass(frozen=True)
class GeocodingRequest(MapsRequest):
    """Address (and/or component filter) to coordinates, dood!

    Example:
        >>> GeocodingRequest(address="1600 Amphitheatre Parkway, Mountain View, CA").withRegion("us")
        >>> GeocodingRequest(components={"postal_code": "94043", "country": "US"})
    """

    API: ClassVar[Api] = Api.GEOCODING
    PATH: ClassVar[str] = ENDPOINT_GEOCODE
    ASSEMBLER: ClassVar[QueryAssembler] = QueryAssembler(
        fields=(
            QueryField("address", validator=nonEmptyString),
            QueryField("place_id", validator=nonEmptyString),
            QueryField("components", serializer=serializeComponents, validator=validateComponents),
            QueryField("bounds", validator=isBounds),
            QueryField("language", validator=memberOf(LANGUAGES)),
            QueryField("region", validator=validateRegion),
        ),
        rules=(
            atLeastOneOf("address", "components", "place_id"),
            mutuallyExclusive("place_id", "address"),
            mutuallyExclusive("place_id", "components"),
        ),
    )

    address: Optional[str] = None
    components: Optional[Mapping[str, str]] = None
    placeId: Optional[str] = None
    bounds: Optional[Bounds] = None
    language: Optional[Language] = None
    region: Optional[str] = None

    def withComponent(self, name: str, value: str) -> "GeocodingRequest":
        components = dict(self.components or {})
        components[name] = value
        return replace(self, components=components)

    def withBounds(self, southwest: LatLng, northeast: LatLng) -> "GeocodingRequest":
        return replace(self, bounds=Bounds(southwest, northeast))

    def withLanguage(self, language: Union[Language, str]) -> "GeocodingRequest":
        return replace(self, language=toMember(LANGUAGES, language))

    def withRegion(self, region: str) -> "GeocodingRequest":
        return replace(self, region=region)

    def toValues(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "place_id": self.placeId,
            "components": self.components or None,
            "bounds": self.bounds,
            "language": self.language,
            "region": self.region,
        }


@dataclass(frozen=True)
class ReverseGeocodingRequest(MapsRequest):
    """Coordinates (or a place ID) to addresses, dood!

    Example:
        >>> ReverseGeocodingRequest(LatLng(40.714224, -73.961452)).withResultTypes(PlaceType.STREET_ADDRESS)
    """

    API: ClassVar[Api] = Api.GEOCODING
    PATH: ClassVar[str] = ENDPOINT_GEOCODE
    ASSEMBLER: ClassVar[QueryAssembler] = QueryAssembler(
        fields=(
            QueryField("latlng", validator=validateLatLng),
            QueryField("place_id", validator=nonEmptyString),
            QueryField("result_type", serializer=pipeJoined, validator=eachItem(memberOf(PLACE_TYPES))),
            QueryField("location_type", serializer=pipeJoined, validator=eachItem(memberOf(LOCATION_TYPES))),
            QueryField("language", validator=memberOf(LANGUAGES)),
        ),
        rules=(exactlyOneOf("latlng", "place_id"),),
    )

    latlng: Optional[LatLng] = None
    placeId: Optional[str] = None
    resultTypes: Tuple[PlaceType, ...] = ()
    locationTypes: Tuple[LocationType, ...] = ()
    language: Optional[Language] = None

    def withResultTypes(self, *resultTypes: Union[PlaceType, str]) -> "ReverseGeocodingRequest":
        return replace(self, resultTypes=enumTuple(PLACE_TYPES, resultTypes))

    def withLocationTypes(self, *locationTypes: Union[LocationType, str]) -> "ReverseGeocodingRequest":
        return replace(self, locationTypes=enumTuple(LOCATION_TYPES, locationTypes))

    def withLanguage(self, language: Union[Language, str]) -> "ReverseGeocodingRequest":
        return replace(self, language=toMember(LANGUAGES, language))

    def toValues(self) -> Dict[str, Any]:
        return {
            "latlng": self.latlng,
            "place_id": self.placeId,
            "result_type": self.resultTypes,
            "location_type": self.locationTypes,
            "language": self.language,
        }
