"""
Tests for fixed precision coordinates, dood!
"""

from decimal import Decimal

import pytest

from lib.google_maps.exceptions import ValidationError
from lib.google_maps.latlng import Bounds, LatLng, formatDecimal, toDecimal


def test_float_uses_shortest_repr():
    """0.1 must not turn into its binary expansion, dood!"""
    assert toDecimal(0.1) == Decimal("0.1000000")
    assert str(toDecimal(0.1)) == "0.1000000"


def test_rounding_is_half_even():
    assert toDecimal("1.00000005") == Decimal("1.0000000")
    assert toDecimal("1.00000015") == Decimal("1.0000002")
    assert toDecimal("-1.00000025") == Decimal("-1.0000002")


def test_negative_zero_is_normalized():
    assert formatDecimal(toDecimal(-0.0)) == "0"
    assert LatLng(-0.0, "-0.00000001").toQuery() == "0,0"


@pytest.mark.parametrize("value", [True, "abc", None, float("nan"), float("inf"), "1e30"])
def test_invalid_values_raise(value):
    """Non-numbers, non-finite and absurd values are rejected, dood!"""
    with pytest.raises(ValidationError):
        toDecimal(value)  # type: ignore[arg-type]


def test_to_query_strips_trailing_zeros():
    assert LatLng(-33.8670522, 151.1957362).toQuery() == "-33.8670522,151.1957362"
    assert LatLng(40, -73.5).toQuery() == "40,-73.5"
    assert str(LatLng("51.5000", "-0.1200")) == "51.5,-0.12"


def test_equality_across_input_types():
    """One logical position is one value whatever it was built from, dood!"""
    first = LatLng(1.5, 2)
    second = LatLng("1.50", Decimal("2.0000000"))

    assert first == second
    assert hash(first) == hash(second)
    assert first.toQuery() == second.toQuery()


@pytest.mark.parametrize(
    "lat, lng, field",
    [
        (90.0000001, 0, "lat"),
        (-91, 0, "lat"),
        (0, 180.5, "lng"),
        (0, -181, "lng"),
    ],
)
def test_range_checks(lat, lng, field):
    with pytest.raises(ValidationError) as excInfo:
        LatLng(lat, lng)
    assert excInfo.value.field == field


def test_range_bounds_are_inclusive():
    assert LatLng(90, 180).toQuery() == "90,180"
    assert LatLng(-90, -180).toQuery() == "-90,-180"


def test_parse():
    assert LatLng.parse(" 40.714224 , -73.961452 ") == LatLng(40.714224, -73.961452)
    with pytest.raises(ValidationError):
        LatLng.parse("40.7")
    with pytest.raises(ValidationError):
        LatLng.parse("1,2,3")


def test_from_dict():
    assert LatLng.fromDict({"lat": 37.4224764, "lng": -122.0842499}) == LatLng(37.4224764, -122.0842499)


def test_frozen():
    point = LatLng(1, 2)
    with pytest.raises(AttributeError):
        point.lat = Decimal(3)  # type: ignore[misc]


def test_bounds_to_query():
    bounds = Bounds(LatLng(34.172684, -118.604794), LatLng(34.236144, -118.500938))
    assert bounds.toQuery() == "34.172684,-118.604794|34.236144,-118.500938"


def test_bounds_from_viewport():
    """Viewport objects from geocoding results round into bounds, dood!"""
    viewport = {
        "northeast": {"lat": 37.4238253802915, "lng": -122.0829009197085},
        "southwest": {"lat": 37.4211274197085, "lng": -122.0855988802915},
    }

    bounds = Bounds.fromViewport(viewport)

    assert bounds.southwest == LatLng("37.4211274", "-122.0855989")
    assert bounds.northeast.toQuery() == "37.4238254,-122.0829009"
