"""
Tests for GeocodingRequest and ReverseGeocodingRequest, dood!
"""

from urllib.parse import unquote

import pytest

from lib.google_maps.enums import Api, Language, LocationType, PlaceType
from lib.google_maps.exceptions import ValidationError
from lib.google_maps.latlng import LatLng
from lib.google_maps.requests import GeocodingRequest, ReverseGeocodingRequest


def wireParams(request) -> dict:
    return {name: unquote(value) for name, value in request.describe().params}


def test_address():
    descriptor = GeocodingRequest(address="1600 Amphitheatre Parkway, Mountain View, CA").describe()

    assert descriptor.api == Api.GEOCODING
    assert descriptor.path == "/geocode/json"
    assert descriptor.params == (("address", "1600%20Amphitheatre%20Parkway%2C%20Mountain%20View%2C%20CA"),)


def test_components_are_sorted():
    """Component filters serialize in a stable order, dood!"""
    first = GeocodingRequest().withComponent("postal_code", "94043").withComponent("country", "US")
    second = GeocodingRequest(components={"country": "US", "postal_code": "94043"})

    assert wireParams(first) == {"components": "country:US|postal_code:94043"}
    assert first.describe() == second.describe()


def test_bounds_language_region():
    request = (
        GeocodingRequest(address="Winnetka")
        .withBounds(LatLng(34.172684, -118.604794), LatLng(34.236144, -118.500938))
        .withLanguage("he")
        .withRegion("us")
    )

    assert wireParams(request) == {
        "address": "Winnetka",
        "bounds": "34.172684,-118.604794|34.236144,-118.500938",
        "language": "iw",
        "region": "us",
    }


def test_place_id():
    assert wireParams(GeocodingRequest(placeId="ChIJd8BlQ2BZwokRAFUEcm_qrcA")) == {
        "place_id": "ChIJd8BlQ2BZwokRAFUEcm_qrcA"
    }


@pytest.mark.parametrize(
    "request_, message",
    [
        (GeocodingRequest(), "One of address, components, place_id is required"),
        (GeocodingRequest(address="x", placeId="y"), "mutually exclusive"),
        (GeocodingRequest(components={"country": "US"}, placeId="y"), "mutually exclusive"),
        (GeocodingRequest(address="   "), "non-empty"),
        (GeocodingRequest(components={"country": ""}), "empty component"),
        (GeocodingRequest(address="x", region="u"), "two letter"),
    ],
)
def test_invalid_geocoding_requests(request_, message):
    with pytest.raises(ValidationError, match=message):
        request_.describe()


def test_reverse_geocoding():
    request = (
        ReverseGeocodingRequest(LatLng(40.714224, -73.961452))
        .withResultTypes(PlaceType.STREET_ADDRESS, "locality")
        .withLocationTypes(LocationType.ROOFTOP)
        .withLanguage(Language.EN)
    )

    assert wireParams(request) == {
        "latlng": "40.714224,-73.961452",
        "result_type": "street_address|locality",
        "location_type": "ROOFTOP",
        "language": "en",
    }


@pytest.mark.parametrize(
    "request_",
    [
        ReverseGeocodingRequest(),
        ReverseGeocodingRequest(latlng=LatLng(1, 2), placeId="abc"),
    ],
)
def test_reverse_geocoding_needs_exactly_one_target(request_):
    """Either coordinates or a place ID, never both, dood!"""
    with pytest.raises(ValidationError):
        request_.describe()


def test_reverse_geocoding_rejects_plain_tuples():
    with pytest.raises(ValidationError, match="must be a LatLng"):
        ReverseGeocodingRequest(latlng=(1, 2)).describe()  # type: ignore[arg-type]
