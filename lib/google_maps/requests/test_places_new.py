"""
Tests for the Places API (New) text search request, dood!
"""

import pytest

from lib.google_maps.enums import Api, Language, PlaceType
from lib.google_maps.exceptions import ValidationError
from lib.google_maps.latlng import LatLng
from lib.google_maps.requests import PlacesNewTextSearchRequest

SYDNEY = LatLng(-33.8670522, 151.1957362)


def test_text_search_body_and_headers():
    request = (
        PlacesNewTextSearchRequest("Spicy Vegetarian Food in Sydney, Australia")
        .withLanguage("en")
        .withType(PlaceType.RESTAURANT)
        .withOpenNow()
        .withMinRating(4.5)
        .withPageSize(10)
        .withLocationBias(SYDNEY, 500)
        .withFieldMask("places.id", "places.rating")
    )
    descriptor = request.describe()

    assert descriptor.api == Api.PLACES_NEW
    assert descriptor.method == "POST"
    assert descriptor.params == ()
    assert descriptor.url("secret") == "https://places.googleapis.com/v1/places:searchText"
    assert descriptor.httpHeaders("secret") == {
        "X-Goog-FieldMask": "places.id,places.rating",
        "X-Goog-Api-Key": "secret",
    }
    assert descriptor.body == {
        "textQuery": "Spicy Vegetarian Food in Sydney, Australia",
        "languageCode": "en",
        "includedType": "restaurant",
        "openNow": True,
        "minRating": 4.5,
        "pageSize": 10,
        "locationBias": {
            "circle": {"center": {"latitude": -33.8670522, "longitude": 151.1957362}, "radius": 500.0},
        },
    }


def test_own_host_wins_over_configured_root():
    descriptor = PlacesNewTextSearchRequest("pizza").describe("http://localhost:8080/maps/api")

    assert descriptor.baseUrl == "https://places.googleapis.com/v1"


def test_default_field_mask():
    headers = PlacesNewTextSearchRequest("pizza", language=Language.EN).describe().httpHeaders()

    assert headers["X-Goog-FieldMask"].startswith("places.id,")
    assert headers["X-Goog-FieldMask"].endswith(",nextPageToken")


@pytest.mark.parametrize(
    "request_, message",
    [
        (PlacesNewTextSearchRequest(""), "textQuery"),
        (PlacesNewTextSearchRequest("pizza").withFieldMask(), "fieldMask"),
        (PlacesNewTextSearchRequest("pizza").withMinRating(5.5), "within"),
        (PlacesNewTextSearchRequest("pizza").withPageSize(21), "within"),
        (PlacesNewTextSearchRequest("pizza").withRegion("usa"), "ccTLD"),
        (PlacesNewTextSearchRequest("pizza").withLocationBias(SYDNEY, 50001), "within"),
    ],
)
def test_invalid_text_searches(request_, message):
    with pytest.raises(ValidationError, match=message):
        request_.describe()
