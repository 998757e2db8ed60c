"""
Distance Matrix API request.

https://developers.google.com/maps/documentation/distance-matrix/distance-matrix
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Mapping, Optional, Sequence, Tuple, Union

from ..constants import ENDPOINT_DISTANCE_MATRIX, MAX_MATRIX_DESTINATIONS, MAX_MATRIX_ELEMENTS, MAX_MATRIX_ORIGINS
from ..decoder import ResponseSchema, gridElements
from ..enums import (
    AVOIDS,
    LANGUAGES,
    TRAFFIC_MODELS,
    TRANSIT_MODES,
    TRANSIT_ROUTE_PREFERENCES,
    TRAVEL_MODES,
    UNIT_SYSTEMS,
    Api,
    Avoid,
    Language,
    TrafficModel,
    TransitMode,
    TransitRoutePreference,
    TravelMode,
    UnitSystem,
)
from ..query import (
    QueryAssembler,
    QueryField,
    allOf,
    eachItem,
    itemCount,
    mutuallyExclusive,
    onlyWhen,
    pipeJoined,
    requires,
)
from .base import MapsRequest
from .common import (
    DepartureTime,
    Location,
    Timestamp,
    enumTuple,
    isModeUnsetOr,
    memberOf,
    toMember,
    validateDepartureTime,
    validateLocation,
    validateRegion,
    validateTimestamp,
)


def maxElements(present: Mapping[str, Any]) -> Optional[str]:
    """origins x destinations must stay within the per-request element limit."""
    count = len(present.get("origins", ())) * len(present.get("destinations", ()))
    if count > MAX_MATRIX_ELEMENTS:
        return f"Matrix of {count} elements exceeds the limit of {MAX_MATRIX_ELEMENTS}"
    return None


@dataclass(frozen=True)
class DistanceMatrixRequest(MapsRequest):
    """Travel distance and time for every origin/destination pair, dood!

    The response carries one element per pair, each with its own status:
    an unreachable pair does not fail the whole request.

    Example:
        >>> request = DistanceMatrixRequest(
        ...     origins=("Vancouver BC", "Seattle"),
        ...     destinations=("San Francisco", "Victoria BC"),
        ... ).withMode(TravelMode.BICYCLING)
    """

    API: ClassVar[Api] = Api.DISTANCE_MATRIX
    PATH: ClassVar[str] = ENDPOINT_DISTANCE_MATRIX
    ASSEMBLER: ClassVar[QueryAssembler] = QueryAssembler(
        fields=(
            QueryField(
                "origins",
                serializer=pipeJoined,
                validator=allOf(itemCount(1, MAX_MATRIX_ORIGINS), eachItem(validateLocation)),
                required=True,
            ),
            QueryField(
                "destinations",
                serializer=pipeJoined,
                validator=allOf(itemCount(1, MAX_MATRIX_DESTINATIONS), eachItem(validateLocation)),
                required=True,
            ),
            QueryField("mode", validator=memberOf(TRAVEL_MODES)),
            QueryField("avoid", serializer=pipeJoined, validator=eachItem(memberOf(AVOIDS))),
            QueryField("language", validator=memberOf(LANGUAGES)),
            QueryField("units", validator=memberOf(UNIT_SYSTEMS)),
            QueryField("region", validator=validateRegion),
            QueryField("arrival_time", validator=validateTimestamp),
            QueryField("departure_time", validator=validateDepartureTime),
            QueryField("traffic_model", validator=memberOf(TRAFFIC_MODELS)),
            QueryField("transit_mode", serializer=pipeJoined, validator=eachItem(memberOf(TRANSIT_MODES))),
            QueryField("transit_routing_preference", validator=memberOf(TRANSIT_ROUTE_PREFERENCES)),
        ),
        rules=(
            maxElements,
            mutuallyExclusive("arrival_time", "departure_time"),
            onlyWhen(
                ("arrival_time", "transit_mode", "transit_routing_preference"),
                isModeUnsetOr(TravelMode.TRANSIT),
                "when mode is transit or unset",
            ),
            requires("traffic_model", "departure_time"),
        ),
    )
    SCHEMA: ClassVar[ResponseSchema] = ResponseSchema(resultsKey="rows", elements=gridElements())

    origins: Tuple[Location, ...]
    destinations: Tuple[Location, ...]
    mode: Optional[TravelMode] = None
    avoid: Tuple[Avoid, ...] = ()
    language: Optional[Language] = None
    units: Optional[UnitSystem] = None
    region: Optional[str] = None
    arrivalTime: Optional[Timestamp] = None
    departureTime: Optional[DepartureTime] = None
    trafficModel: Optional[TrafficModel] = None
    transitModes: Tuple[TransitMode, ...] = ()
    transitRoutingPreference: Optional[TransitRoutePreference] = None

    def __post_init__(self):
        # Accept lists and single locations at the call site
        for name in ("origins", "destinations"):
            value = getattr(self, name)
            if isinstance(value, str) or not isinstance(value, Sequence):
                value = (value,)
            object.__setattr__(self, name, tuple(value))

    @classmethod
    def between(cls, origins: Sequence[Location], destinations: Sequence[Location]) -> "DistanceMatrixRequest":
        return cls(origins=tuple(origins), destinations=tuple(destinations))

    def withMode(self, mode: Union[TravelMode, str]) -> "DistanceMatrixRequest":
        return replace(self, mode=toMember(TRAVEL_MODES, mode))

    def withAvoid(self, *avoid: Union[Avoid, str]) -> "DistanceMatrixRequest":
        return replace(self, avoid=enumTuple(AVOIDS, avoid))

    def withLanguage(self, language: Union[Language, str]) -> "DistanceMatrixRequest":
        return replace(self, language=toMember(LANGUAGES, language))

    def withUnits(self, units: Union[UnitSystem, str]) -> "DistanceMatrixRequest":
        return replace(self, units=toMember(UNIT_SYSTEMS, units))

    def withRegion(self, region: str) -> "DistanceMatrixRequest":
        return replace(self, region=region)

    def withArrivalTime(self, arrivalTime: Timestamp) -> "DistanceMatrixRequest":
        return replace(self, arrivalTime=arrivalTime)

    def withDepartureTime(self, departureTime: DepartureTime) -> "DistanceMatrixRequest":
        return replace(self, departureTime=departureTime)

    def withTrafficModel(self, trafficModel: Union[TrafficModel, str]) -> "DistanceMatrixRequest":
        return replace(self, trafficModel=toMember(TRAFFIC_MODELS, trafficModel))

    def withTransitModes(self, *transitModes: Union[TransitMode, str]) -> "DistanceMatrixRequest":
        return replace(self, transitModes=enumTuple(TRANSIT_MODES, transitModes))

    def withTransitRoutingPreference(
        self, preference: Union[TransitRoutePreference, str]
    ) -> "DistanceMatrixRequest":
        return replace(self, transitRoutingPreference=toMember(TRANSIT_ROUTE_PREFERENCES, preference))

    def toValues(self) -> Dict[str, Any]:
        return {
            "origins": self.origins,
            "destinations": self.destinations,
            "mode": self.mode,
            "avoid": self.avoid,
            "language": self.language,
            "units": self.units,
            "region": self.region,
            "arrival_time": self.arrivalTime,
            "departure_time": self.departureTime,
            "traffic_model": self.trafficModel,
            "transit_mode": self.transitModes,
            "transit_routing_preference": self.transitRoutingPreference,
        }
