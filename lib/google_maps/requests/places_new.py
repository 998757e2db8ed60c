"""
Places API (New) text search.

https://developers.google.com/maps/documentation/places/web-service/text-search

Unlike the legacy web services this endpoint takes a JSON body over POST,
expects the key in ``X-Goog-Api-Key`` and the wanted response fields in
``X-Goog-FieldMask``, and answers without a ``status`` field.
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Union

from ..constants import (
    ENDPOINT_PLACES_NEW_TEXT_SEARCH,
    FIELD_MASK_HEADER,
    MAX_PLACES_NEW_RATING,
    MAX_PLACES_NEW_RESULTS,
    MAX_PLACES_RADIUS,
    PLACES_NEW_BASE_URL,
)
from ..decoder import ResponseSchema
from ..enums import LANGUAGES, PLACE_TYPES, Api, Language, PlaceType
from ..latlng import LatLng
from ..query import QueryAssembler, QueryField, allOf, eachItem, inRange, itemCount, nonEmptyString
from .base import JsonBodyRequest
from .common import memberOf, toMember, validateRegion

DEFAULT_FIELD_MASK: Tuple[str, ...] = (
    "places.id",
    "places.displayName",
    "places.formattedAddress",
    "places.location",
    "nextPageToken",
)


def validateCircle(value: Any) -> Optional[str]:
    """A bias circle is a ``(LatLng, radius in meters)`` pair."""
    if not isinstance(value, tuple) or len(value) != 2 or not isinstance(value[0], LatLng):
        return "must be a (LatLng, radius) pair"
    return inRange(0, MAX_PLACES_RADIUS)(value[1])


@dataclass(frozen=True)
class PlacesNewTextSearchRequest(JsonBodyRequest):
    """Places matching a text query, served by the Places API (New), dood!

    Example:
        >>> PlacesNewTextSearchRequest("Spicy Vegetarian Food in Sydney, Australia").withMinRating(4.0)
    """

    API: ClassVar[Api] = Api.PLACES_NEW
    PATH: ClassVar[str] = ENDPOINT_PLACES_NEW_TEXT_SEARCH
    BASE_URL: ClassVar[str] = PLACES_NEW_BASE_URL
    SCHEMA: ClassVar[ResponseSchema] = ResponseSchema(resultsKey="places", statusKey=None)
    ASSEMBLER: ClassVar[QueryAssembler] = QueryAssembler(
        fields=(
            QueryField("textQuery", validator=nonEmptyString, required=True),
            QueryField("fieldMask", validator=allOf(itemCount(1), eachItem(nonEmptyString)), required=True),
            QueryField("languageCode", validator=memberOf(LANGUAGES)),
            QueryField("regionCode", validator=validateRegion),
            QueryField("includedType", validator=memberOf(PLACE_TYPES)),
            QueryField("openNow"),
            QueryField("minRating", validator=inRange(0, MAX_PLACES_NEW_RATING)),
            QueryField("pageSize", validator=inRange(1, MAX_PLACES_NEW_RESULTS)),
            QueryField("locationBias", validator=validateCircle),
            QueryField("pageToken", validator=nonEmptyString),
        ),
    )

    textQuery: str
    fieldMask: Tuple[str, ...] = DEFAULT_FIELD_MASK
    language: Optional[Language] = None
    region: Optional[str] = None
    includedType: Optional[PlaceType] = None
    openNow: bool = False
    minRating: Optional[float] = None
    pageSize: Optional[int] = None
    locationBias: Optional[Tuple[LatLng, float]] = None
    pageToken: Optional[str] = None

    def withFieldMask(self, *fields: str) -> "PlacesNewTextSearchRequest":
        return replace(self, fieldMask=tuple(fields))

    def withLanguage(self, language: Union[Language, str]) -> "PlacesNewTextSearchRequest":
        return replace(self, language=toMember(LANGUAGES, language))

    def withRegion(self, region: str) -> "PlacesNewTextSearchRequest":
        return replace(self, region=region)

    def withType(self, placeType: Union[PlaceType, str]) -> "PlacesNewTextSearchRequest":
        return replace(self, includedType=toMember(PLACE_TYPES, placeType))

    def withOpenNow(self, openNow: bool = True) -> "PlacesNewTextSearchRequest":
        return replace(self, openNow=openNow)

    def withMinRating(self, minRating: float) -> "PlacesNewTextSearchRequest":
        return replace(self, minRating=minRating)

    def withPageSize(self, pageSize: int) -> "PlacesNewTextSearchRequest":
        return replace(self, pageSize=pageSize)

    def withLocationBias(self, center: LatLng, radius: float) -> "PlacesNewTextSearchRequest":
        return replace(self, locationBias=(center, radius))

    def withPageToken(self, pageToken: str) -> "PlacesNewTextSearchRequest":
        return replace(self, pageToken=pageToken)

    def toValues(self) -> Dict[str, Any]:
        return {
            "textQuery": self.textQuery,
            "fieldMask": self.fieldMask,
            "languageCode": self.language,
            "regionCode": self.region,
            "includedType": self.includedType,
            "openNow": True if self.openNow else None,
            "minRating": self.minRating,
            "pageSize": self.pageSize,
            "locationBias": self.locationBias,
            "pageToken": self.pageToken,
        }

    def toBody(self, present: Mapping[str, Any]) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        for name, value in present.items():
            if name == "fieldMask":
                continue
            if name == "locationBias":
                center, radius = value
                body[name] = {
                    "circle": {
                        "center": {"latitude": float(center.lat), "longitude": float(center.lng)},
                        "radius": float(radius),
                    }
                }
            elif name in ("languageCode", "regionCode", "includedType"):
                body[name] = str(value)
            else:
                body[name] = value
        return body

    def toHeaders(self) -> Tuple[Tuple[str, str], ...]:
        return ((FIELD_MASK_HEADER, ",".join(self.fieldMask)),)
