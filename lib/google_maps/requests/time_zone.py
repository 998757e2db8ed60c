"""
Time Zone API request.

https://developers.google.com/maps/documentation/timezone/requests-timezone
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Optional, Union

from ..constants import ENDPOINT_TIME_ZONE
from ..decoder import ResponseSchema
from ..enums import LANGUAGES, Api, Language
from ..latlng import LatLng
from ..query import QueryAssembler, QueryField
from .base import MapsRequest
from .common import Timestamp, memberOf, toMember, validateLatLng, validateTimestamp


@dataclass(frozen=True)
class TimeZoneRequest(MapsRequest):
    """Time zone and offsets at a location for a given instant.

    The response object itself is the result, there is no results list.
    """

    API: ClassVar[Api] = Api.TIME_ZONE
    PATH: ClassVar[str] = ENDPOINT_TIME_ZONE
    ASSEMBLER: ClassVar[QueryAssembler] = QueryAssembler(
        fields=(
            QueryField("location", validator=validateLatLng, required=True),
            QueryField("timestamp", validator=validateTimestamp, required=True),
            QueryField("language", validator=memberOf(LANGUAGES)),
        ),
    )
    SCHEMA: ClassVar[ResponseSchema] = ResponseSchema(resultsKey=None)

    location: LatLng
    timestamp: Timestamp
    language: Optional[Language] = None

    def withLanguage(self, language: Union[Language, str]) -> "TimeZoneRequest":
        return replace(self, language=toMember(LANGUAGES, language))

    def toValues(self) -> Dict[str, Any]:
        return {
            "location": self.location,
            "timestamp": self.timestamp,
            "language": self.language,
        }
