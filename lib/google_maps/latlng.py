"""
Fixed precision geographic coordinates.

Coordinates are held as ``Decimal`` rounded half-even to 7 decimal places
(about 11 mm), so one logical position always serializes to the same
string and can be used as an exact cache key.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Union

from .constants import COORDINATE_PLACES, MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE
from .exceptions import ValidationError
from .models import LatLngLiteral, Viewport

logger = logging.getLogger(__name__)

CoordinateValue = Union[Decimal, float, int, str]

_QUANTUM = Decimal(1).scaleb(-COORDINATE_PLACES)


def toDecimal(value: CoordinateValue, name: str = "coordinate") -> Decimal:
    """Convert a coordinate into a Decimal rounded to 7 places.

    Floats go through their shortest ``repr`` so that ``0.1`` becomes
    ``Decimal("0.1")`` rather than its binary expansion.

    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number, got {value!r}", name)
    try:
        if isinstance(value, float):
            number = Decimal(repr(value))
        elif isinstance(value, str):
            number = Decimal(value.strip())
        else:
            number = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be a number, got {value!r}", name) from e

    if not number.is_finite():
        raise ValidationError(f"{name} must be finite, got {value!r}", name)

    try:
        number = number.quantize(_QUANTUM, rounding=ROUND_HALF_EVEN)
    except InvalidOperation as e:
        raise ValidationError(f"{name} is out of range, got {value!r}", name) from e
    if number.is_zero():
        # Drops the sign of -0
        number = Decimal(0).quantize(_QUANTUM)
    return number


def formatDecimal(value: Decimal) -> str:
    """Render a coordinate without insignificant trailing zeros.

    Example:
        >>> formatDecimal(Decimal("-33.8670000"))
        '-33.867'
        >>> formatDecimal(Decimal("151.0000000"))
        '151'
    """
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


@dataclass(frozen=True)
class LatLng:
    """Latitude/longitude pair, dood!

    Attributes:
        lat: Latitude in degrees, within [-90, 90]
        lng: Longitude in degrees, within [-180, 180]

    Example:
        >>> LatLng(-33.8670522, 151.1957362).toQuery()
        '-33.8670522,151.1957362'
        >>> LatLng.parse(" 40.714224 , -73.961452 ")
        LatLng(lat=Decimal('40.7142240'), lng=Decimal('-73.9614520'))
    """

    lat: Decimal
    lng: Decimal

    def __init__(self, lat: CoordinateValue, lng: CoordinateValue):
        latitude = toDecimal(lat, "lat")
        longitude = toDecimal(lng, "lng")

        if not MIN_LATITUDE <= latitude <= MAX_LATITUDE:
            raise ValidationError(f"Latitude {formatDecimal(latitude)} is outside [-90, 90]", "lat")
        if not MIN_LONGITUDE <= longitude <= MAX_LONGITUDE:
            raise ValidationError(f"Longitude {formatDecimal(longitude)} is outside [-180, 180]", "lng")

        object.__setattr__(self, "lat", latitude)
        object.__setattr__(self, "lng", longitude)

    @classmethod
    def parse(cls, text: str) -> "LatLng":
        """
        Parse a ``"lat,lng"`` string.

        Raises:
            ValidationError: If the text is not two comma separated numbers
        """
        parts = text.split(",")
        if len(parts) != 2:
            raise ValidationError(f"Expected 'lat,lng', got {text!r}")
        return cls(parts[0], parts[1])

    @classmethod
    def fromDict(cls, data: LatLngLiteral) -> "LatLng":
        """Build from a response ``{"lat": ..., "lng": ...}`` object."""
        return cls(data["lat"], data["lng"])

    def toQuery(self) -> str:
        return f"{formatDecimal(self.lat)},{formatDecimal(self.lng)}"

    def __str__(self) -> str:
        return self.toQuery()


@dataclass(frozen=True)
class Bounds:
    """Rectangular viewport given by its south-west and north-east corners."""

    southwest: LatLng
    northeast: LatLng

    def toQuery(self) -> str:
        return f"{self.southwest.toQuery()}|{self.northeast.toQuery()}"

    def __str__(self) -> str:
        return self.toQuery()

    @classmethod
    def fromViewport(cls, viewport: Viewport) -> "Bounds":
        """Build from a response ``geometry.viewport`` (or ``bounds``) object."""
        return cls(LatLng.fromDict(viewport["southwest"]), LatLng.fromDict(viewport["northeast"]))
