"""
Elevation API request.

https://developers.google.com/maps/documentation/elevation/requests-elevation
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Optional, Sequence, Tuple

from ..constants import ENDPOINT_ELEVATION, MAX_ELEVATION_SAMPLES, MIN_ELEVATION_SAMPLES
from ..enums import Api
from ..latlng import LatLng
from ..query import (
    QueryAssembler,
    QueryField,
    allOf,
    eachItem,
    exactlyOneOf,
    inRange,
    itemCount,
    pipeJoined,
    requires,
)
from .base import MapsRequest
from .common import validateLatLng


@dataclass(frozen=True)
class ElevationRequest(MapsRequest):
    """Elevation at discrete locations, or sampled along a path.

    Example:
        >>> ElevationRequest.forLocations(LatLng(39.7391536, -104.9847034))
        >>> ElevationRequest.alongPath(LatLng(36.578581, -118.291994), LatLng(36.23998, -116.83171), samples=3)
    """

    API: ClassVar[Api] = Api.ELEVATION
    PATH: ClassVar[str] = ENDPOINT_ELEVATION
    ASSEMBLER: ClassVar[QueryAssembler] = QueryAssembler(
        fields=(
            QueryField("locations", serializer=pipeJoined, validator=allOf(itemCount(1), eachItem(validateLatLng))),
            QueryField("path", serializer=pipeJoined, validator=allOf(itemCount(2), eachItem(validateLatLng))),
            QueryField("samples", validator=inRange(MIN_ELEVATION_SAMPLES, MAX_ELEVATION_SAMPLES)),
        ),
        rules=(
            exactlyOneOf("locations", "path"),
            requires("samples", "path"),
            requires("path", "samples"),
        ),
    )

    locations: Tuple[LatLng, ...] = ()
    path: Tuple[LatLng, ...] = ()
    samples: Optional[int] = None

    @classmethod
    def forLocations(cls, *locations: LatLng) -> "ElevationRequest":
        return cls(locations=tuple(locations))

    @classmethod
    def alongPath(cls, *path: LatLng, samples: int) -> "ElevationRequest":
        return cls(path=tuple(path), samples=samples)

    def withLocations(self, locations: Sequence[LatLng]) -> "ElevationRequest":
        return replace(self, locations=tuple(locations))

    def withPath(self, path: Sequence[LatLng], samples: int) -> "ElevationRequest":
        return replace(self, path=tuple(path), samples=samples)

    def toValues(self) -> Dict[str, Any]:
        return {
            "locations": self.locations,
            "path": self.path,
            "samples": self.samples,
        }
