"""
Places API requests (text search and nearby search).

https://developers.google.com/maps/documentation/places/web-service/search-text
https://developers.google.com/maps/documentation/places/web-service/search-nearby
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Mapping, Optional, Union

from ..constants import (
    ENDPOINT_PLACES_NEARBY_SEARCH,
    ENDPOINT_PLACES_TEXT_SEARCH,
    MAX_PLACES_RADIUS,
    MAX_PRICE_LEVEL,
    MIN_PRICE_LEVEL,
)
from ..enums import LANGUAGES, PLACE_TYPES, RANK_BYS, Api, Language, PlaceType, RankBy
from ..latlng import LatLng
from ..query import QueryAssembler, QueryField, atLeastOneOf, inRange, nonEmptyString, requires
from .base import MapsRequest
from .common import memberOf, toMember, validateLatLng, validateRegion

validatePrice = inRange(MIN_PRICE_LEVEL, MAX_PRICE_LEVEL)
validateRadius = inRange(1, MAX_PLACES_RADIUS)


def priceRangeOrdered(present: Mapping[str, Any]) -> Optional[str]:
    if "minprice" in present and "maxprice" in present and present["minprice"] > present["maxprice"]:
        return "minprice must not be greater than maxprice"
    return None


def rankByDistanceRules(present: Mapping[str, Any]) -> Optional[str]:
    """``rankby=distance`` replaces radius and needs a keyword or type; otherwise radius is required."""
    if "pagetoken" in present:
        return None
    if present.get("rankby") is RankBy.DISTANCE:
        if "radius" in present:
            return "radius must not be set when rankby=distance"
        if "keyword" not in present and "type" not in present:
            return "rankby=distance requires keyword or type"
        return None
    if "radius" not in present:
        return "radius is required unless rankby=distance"
    return None


@dataclass(frozen=True)
class PlacesTextSearchRequest(MapsRequest):
    """Places matching a text query such as "pizza in New York", dood!

    A ``pageToken`` from a previous response fetches the next page.
    """

    API: ClassVar[Api] = Api.PLACES
    PATH: ClassVar[str] = ENDPOINT_PLACES_TEXT_SEARCH
    ASSEMBLER: ClassVar[QueryAssembler] = QueryAssembler(
        fields=(
            QueryField("query", validator=nonEmptyString),
            QueryField("location", validator=validateLatLng),
            QueryField("radius", validator=validateRadius),
            QueryField("language", validator=memberOf(LANGUAGES)),
            QueryField("region", validator=validateRegion),
            QueryField("type", validator=memberOf(PLACE_TYPES)),
            QueryField("opennow"),
            QueryField("minprice", validator=validatePrice),
            QueryField("maxprice", validator=validatePrice),
            QueryField("pagetoken", validator=nonEmptyString),
        ),
        rules=(
            atLeastOneOf("query", "type", "pagetoken"),
            requires("radius", "location"),
            priceRangeOrdered,
        ),
    )

    query: Optional[str] = None
    location: Optional[LatLng] = None
    radius: Optional[int] = None
    language: Optional[Language] = None
    region: Optional[str] = None
    placeType: Optional[PlaceType] = None
    openNow: bool = False
    minPrice: Optional[int] = None
    maxPrice: Optional[int] = None
    pageToken: Optional[str] = None

    def withLocation(self, location: LatLng, radius: Optional[int] = None) -> "PlacesTextSearchRequest":
        return replace(self, location=location, radius=radius)

    def withLanguage(self, language: Union[Language, str]) -> "PlacesTextSearchRequest":
        return replace(self, language=toMember(LANGUAGES, language))

    def withRegion(self, region: str) -> "PlacesTextSearchRequest":
        return replace(self, region=region)

    def withType(self, placeType: Union[PlaceType, str]) -> "PlacesTextSearchRequest":
        return replace(self, placeType=toMember(PLACE_TYPES, placeType))

    def withOpenNow(self, openNow: bool = True) -> "PlacesTextSearchRequest":
        return replace(self, openNow=openNow)

    def withPriceRange(self, minPrice: Optional[int], maxPrice: Optional[int]) -> "PlacesTextSearchRequest":
        return replace(self, minPrice=minPrice, maxPrice=maxPrice)

    def withPageToken(self, pageToken: str) -> "PlacesTextSearchRequest":
        return replace(self, pageToken=pageToken)

    def toValues(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "location": self.location,
            "radius": self.radius,
            "language": self.language,
            "region": self.region,
            "type": self.placeType,
            "opennow": True if self.openNow else None,
            "minprice": self.minPrice,
            "maxprice": self.maxPrice,
            "pagetoken": self.pageToken,
        }


@dataclass(frozen=True)
class PlacesNearbySearchRequest(MapsRequest):
    """Places around a location, ranked by prominence or by distance.

    Example:
        >>> PlacesNearbySearchRequest(LatLng(-33.8670522, 151.1957362), radius=1500).withType(PlaceType.RESTAURANT)
        >>> PlacesNearbySearchRequest(LatLng(-33.8670522, 151.1957362), rankBy=RankBy.DISTANCE, keyword="cruise")
    """

    API: ClassVar[Api] = Api.PLACES
    PATH: ClassVar[str] = ENDPOINT_PLACES_NEARBY_SEARCH
    ASSEMBLER: ClassVar[QueryAssembler] = QueryAssembler(
        fields=(
            QueryField("location", validator=validateLatLng, required=True),
            QueryField("radius", validator=validateRadius),
            QueryField("keyword", validator=nonEmptyString),
            QueryField("language", validator=memberOf(LANGUAGES)),
            QueryField("minprice", validator=validatePrice),
            QueryField("maxprice", validator=validatePrice),
            QueryField("opennow"),
            QueryField("rankby", validator=memberOf(RANK_BYS)),
            QueryField("type", validator=memberOf(PLACE_TYPES)),
            QueryField("pagetoken", validator=nonEmptyString),
        ),
        rules=(
            rankByDistanceRules,
            priceRangeOrdered,
        ),
    )

    location: LatLng
    radius: Optional[int] = None
    keyword: Optional[str] = None
    language: Optional[Language] = None
    minPrice: Optional[int] = None
    maxPrice: Optional[int] = None
    openNow: bool = False
    rankBy: Optional[RankBy] = None
    placeType: Optional[PlaceType] = None
    pageToken: Optional[str] = None

    def withRadius(self, radius: int) -> "PlacesNearbySearchRequest":
        return replace(self, radius=radius)

    def withKeyword(self, keyword: str) -> "PlacesNearbySearchRequest":
        return replace(self, keyword=keyword)

    def withLanguage(self, language: Union[Language, str]) -> "PlacesNearbySearchRequest":
        return replace(self, language=toMember(LANGUAGES, language))

    def withPriceRange(self, minPrice: Optional[int], maxPrice: Optional[int]) -> "PlacesNearbySearchRequest":
        return replace(self, minPrice=minPrice, maxPrice=maxPrice)

    def withOpenNow(self, openNow: bool = True) -> "PlacesNearbySearchRequest":
        return replace(self, openNow=openNow)

    def withRankBy(self, rankBy: Union[RankBy, str]) -> "PlacesNearbySearchRequest":
        return replace(self, rankBy=toMember(RANK_BYS, rankBy))

    def withType(self, placeType: Union[PlaceType, str]) -> "PlacesNearbySearchRequest":
        return replace(self, placeType=toMember(PLACE_TYPES, placeType))

    def withPageToken(self, pageToken: str) -> "PlacesNearbySearchRequest":
        return replace(self, pageToken=pageToken)

    def toValues(self) -> Dict[str, Any]:
        return {
            "location": self.location,
            "radius": self.radius,
            "keyword": self.keyword,
            "language": self.language,
            "minprice": self.minPrice,
            "maxprice": self.maxPrice,
            "opennow": True if self.openNow else None,
            "rankby": self.rankBy,
            "type": self.placeType,
            "pagetoken": self.pageToken,
        }
