"""
Directions API request.

https://developers.google.com/maps/documentation/directions/get-directions
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from ..constants import ENDPOINT_DIRECTIONS, MAX_WAYPOINTS
from ..decoder import ResponseSchema, listElements
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
    Waypoint,
    WaypointList,
    asWaypoint,
    enumTuple,
    isModeUnsetOr,
    isNotMode,
    memberOf,
    toMember,
    validateDepartureTime,
    validateLocation,
    validateRegion,
    validateTimestamp,
    validateWaypoint,
)

TRANSIT_ONLY_FIELDS = ("arrival_time", "transit_mode", "transit_routing_preference")


@dataclass(frozen=True)
class DirectionsRequest(MapsRequest):
    """Route between two locations, optionally through waypoints, dood!

    Example:
        >>> request = (
        ...     DirectionsRequest("Toronto", "Montreal")
        ...     .withMode(TravelMode.BICYCLING)
        ...     .withWaypoints("Kingston", Waypoint(LatLng(44.2312, -76.4860), via=True))
        ...     .withLanguage(Language.FR)
        ... )
    """

    API: ClassVar[Api] = Api.DIRECTIONS
    PATH: ClassVar[str] = ENDPOINT_DIRECTIONS
    ASSEMBLER: ClassVar[QueryAssembler] = QueryAssembler(
        fields=(
            QueryField("origin", validator=validateLocation, required=True),
            QueryField("destination", validator=validateLocation, required=True),
            QueryField("mode", validator=memberOf(TRAVEL_MODES)),
            QueryField("waypoints", validator=allOf(itemCount(1, MAX_WAYPOINTS), eachItem(validateWaypoint))),
            QueryField("alternatives"),
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
            mutuallyExclusive("arrival_time", "departure_time"),
            onlyWhen(TRANSIT_ONLY_FIELDS, isModeUnsetOr(TravelMode.TRANSIT), "when mode is transit or unset"),
            onlyWhen(("waypoints",), isNotMode(TravelMode.TRANSIT), "when mode is not transit"),
            mutuallyExclusive("waypoints", "alternatives"),
            mutuallyExclusive("waypoints", "avoid"),
            requires("traffic_model", "departure_time"),
        ),
    )
    SCHEMA: ClassVar[ResponseSchema] = ResponseSchema(
        resultsKey="routes",
        elements=listElements("geocoded_waypoints", statusKey="geocoder_status"),
    )

    origin: Location
    destination: Location
    mode: Optional[TravelMode] = None
    waypoints: Tuple[Waypoint, ...] = ()
    optimizeWaypoints: bool = False
    alternatives: bool = False
    avoid: Tuple[Avoid, ...] = ()
    language: Optional[Language] = None
    units: Optional[UnitSystem] = None
    region: Optional[str] = None
    arrivalTime: Optional[Timestamp] = None
    departureTime: Optional[DepartureTime] = None
    trafficModel: Optional[TrafficModel] = None
    transitModes: Tuple[TransitMode, ...] = ()
    transitRoutingPreference: Optional[TransitRoutePreference] = None

    def withMode(self, mode: Union[TravelMode, str]) -> "DirectionsRequest":
        return replace(self, mode=toMember(TRAVEL_MODES, mode))

    def withWaypoints(self, *waypoints: Union[Waypoint, Location], optimize: bool = False) -> "DirectionsRequest":
        """Waypoints visited in order; ``optimize`` lets the server reorder them."""
        return replace(
            self,
            waypoints=tuple(asWaypoint(waypoint) for waypoint in waypoints),
            optimizeWaypoints=optimize,
        )

    def withAlternatives(self, alternatives: bool = True) -> "DirectionsRequest":
        return replace(self, alternatives=alternatives)

    def withAvoid(self, *avoid: Union[Avoid, str]) -> "DirectionsRequest":
        return replace(self, avoid=enumTuple(AVOIDS, avoid))

    def withLanguage(self, language: Union[Language, str]) -> "DirectionsRequest":
        return replace(self, language=toMember(LANGUAGES, language))

    def withUnits(self, units: Union[UnitSystem, str]) -> "DirectionsRequest":
        return replace(self, units=toMember(UNIT_SYSTEMS, units))

    def withRegion(self, region: str) -> "DirectionsRequest":
        return replace(self, region=region)

    def withArrivalTime(self, arrivalTime: Timestamp) -> "DirectionsRequest":
        return replace(self, arrivalTime=arrivalTime)

    def withDepartureTime(self, departureTime: DepartureTime) -> "DirectionsRequest":
        return replace(self, departureTime=departureTime)

    def withTrafficModel(self, trafficModel: Union[TrafficModel, str]) -> "DirectionsRequest":
        return replace(self, trafficModel=toMember(TRAFFIC_MODELS, trafficModel))

    def withTransitModes(self, *transitModes: Union[TransitMode, str]) -> "DirectionsRequest":
        return replace(self, transitModes=enumTuple(TRANSIT_MODES, transitModes))

    def withTransitRoutingPreference(
        self, preference: Union[TransitRoutePreference, str]
    ) -> "DirectionsRequest":
        return replace(self, transitRoutingPreference=toMember(TRANSIT_ROUTE_PREFERENCES, preference))

    def toValues(self) -> Dict[str, Any]:
        return {
            "origin": self.origin,
            "destination": self.destination,
            "mode": self.mode,
            "waypoints": WaypointList(self.waypoints, self.optimizeWaypoints) if self.waypoints else None,
            "alternatives": True if self.alternatives else None,
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
