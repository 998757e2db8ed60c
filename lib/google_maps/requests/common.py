"""
Field types and validators shared by the endpoint requests.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, Callable, Iterator, Mapping, Optional, Tuple, Union

from ..enum_codec import EnumTable, isUnrecognized
from ..latlng import LatLng
from ..query import nonEmptyString, serializeScalar

NOW = "now"


@dataclass(frozen=True)
class PlaceId:
    """Location given by its Google place ID (``place_id:<id>`` on the wire)."""

    placeId: str

    def toQuery(self) -> str:
        return f"place_id:{self.placeId}"


# Free-form address, coordinates or place ID
Location = Union[str, LatLng, PlaceId]
# Unix seconds or an aware datetime
Timestamp = Union[int, datetime]
# Timestamp or the literal "now"
DepartureTime = Union[int, datetime, str]


@dataclass(frozen=True)
class Waypoint:
    """Intermediate route point. ``via`` waypoints shape the route without a stopover."""

    location: Location
    via: bool = False

    def toQuery(self) -> str:
        text = serializeScalar(self.location)
        return f"via:{text}" if self.via else text


@dataclass(frozen=True)
class WaypointList:
    """Ordered waypoints plus the ``optimize:true`` flag."""

    waypoints: Tuple[Waypoint, ...]
    optimize: bool = False

    def __len__(self) -> int:
        return len(self.waypoints)

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(self.waypoints)

    def toQuery(self) -> str:
        parts = [waypoint.toQuery() for waypoint in self.waypoints]
        if self.optimize:
            parts.insert(0, "optimize:true")
        return "|".join(parts)


def asWaypoint(value: Union[Waypoint, Location]) -> Waypoint:
    return value if isinstance(value, Waypoint) else Waypoint(value)


def validateLocation(value: Any) -> Optional[str]:
    if isinstance(value, (LatLng, PlaceId)):
        return None
    if isinstance(value, str):
        return nonEmptyString(value)
    return f"must be an address, LatLng or PlaceId, got {type(value).__name__}"


def validateWaypoint(value: Any) -> Optional[str]:
    if isinstance(value, Waypoint):
        return validateLocation(value.location)
    return "must be a Waypoint"


def validateTimestamp(value: Any) -> Optional[str]:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return "datetime must be timezone aware"
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return None if value >= 0 else "must not be negative"
    return f"must be Unix seconds or a datetime, got {type(value).__name__}"


def validateDepartureTime(value: Any) -> Optional[str]:
    if value == NOW:
        return None
    return validateTimestamp(value)


def memberOf(table: EnumTable) -> Callable[[Any], Optional[str]]:
    """Validator accepting members of a vocabulary (and tokens it does not know yet)."""

    def validate(value: Any) -> Optional[str]:
        if isinstance(value, table.enumType) or isUnrecognized(value):
            return None
        return f"must be a {table.name}, got {value!r}"

    return validate


def toMember(table: EnumTable, value: Union[StrEnum, str, None]) -> Any:
    """Accept either enum members or their tokens at the call site."""
    if value is None or isinstance(value, table.enumType):
        return value
    return table.decode(value)


def validateRegion(value: Any) -> Optional[str]:
    """Regions are ccTLD codes such as ``us`` or ``uk``."""
    if not isinstance(value, str) or len(value) != 2 or not value.isalpha():
        return f"must be a two letter ccTLD code, got {value!r}"
    return None


def serializeComponents(components: Mapping[str, str]) -> str:
    """``{"country": "US", "postal_code": "94043"}`` -> ``country:US|postal_code:94043`` (sorted by key)."""
    return "|".join(f"{name}:{value}" for name, value in sorted(components.items()))


def validateComponents(value: Any) -> Optional[str]:
    if not isinstance(value, Mapping) or not value:
        return "must be a non-empty mapping"
    for name, component in value.items():
        if not isinstance(name, str) or not name or not isinstance(component, str) or not component:
            return f"has an empty component {name!r}"
    return None


def isModeUnsetOr(mode: StrEnum) -> Callable[[Mapping[str, Any]], bool]:
    """Condition holding when no ``mode`` was given, or when it equals ``mode``."""

    def condition(present: Mapping[str, Any]) -> bool:
        return "mode" not in present or present["mode"] is mode

    return condition


def isNotMode(mode: StrEnum) -> Callable[[Mapping[str, Any]], bool]:
    def condition(present: Mapping[str, Any]) -> bool:
        return present.get("mode") is not mode

    return condition


def enumTuple(table: EnumTable, values: Any) -> Tuple[Any, ...]:
    return tuple(toMember(table, value) for value in values)


def validateLatLng(value: Any) -> Optional[str]:
    return None if isinstance(value, LatLng) else f"must be a LatLng, got {type(value).__name__}"
