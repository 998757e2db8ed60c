"""
Tests for DistanceMatrixRequest, dood!
"""

from urllib.parse import unquote

import pytest

from lib.google_maps.enums import Api, TrafficModel, TravelMode, UnitSystem
from lib.google_maps.exceptions import ValidationError
from lib.google_maps.latlng import LatLng
from lib.google_maps.requests import DistanceMatrixRequest, PlaceId


def wireParams(request: DistanceMatrixRequest) -> dict:
    return {name: unquote(value) for name, value in request.describe().params}


def test_origins_and_destinations_are_pipe_joined():
    request = DistanceMatrixRequest.between(
        ["Vancouver BC", LatLng(47.6062, -122.3321)],
        ["San Francisco", PlaceId("ChIJIQBpAG2ahYAR_6128GcTUEo")],
    )

    descriptor = request.describe()

    assert descriptor.api == Api.DISTANCE_MATRIX
    assert descriptor.path == "/distancematrix/json"
    assert wireParams(request) == {
        "origins": "Vancouver BC|47.6062,-122.3321",
        "destinations": "San Francisco|place_id:ChIJIQBpAG2ahYAR_6128GcTUEo",
    }


def test_single_locations_are_wrapped():
    """A lone address or point is accepted where a list is expected, dood!"""
    request = DistanceMatrixRequest("Vancouver BC", LatLng(1, 2))  # type: ignore[arg-type]

    assert request.origins == ("Vancouver BC",)
    assert request.destinations == (LatLng(1, 2),)


def test_options():
    request = (
        DistanceMatrixRequest.between(["A"], ["B"])
        .withMode(TravelMode.DRIVING)
        .withAvoid("highways")
        .withUnits(UnitSystem.METRIC)
        .withDepartureTime(1500000000)
        .withTrafficModel(TrafficModel.OPTIMISTIC)
    )

    params = wireParams(request)
    assert list(params) == ["origins", "destinations", "mode", "avoid", "units", "departure_time", "traffic_model"]
    assert params["traffic_model"] == "optimistic"


@pytest.mark.parametrize(
    "request_, message",
    [
        (DistanceMatrixRequest.between([], ["B"]), "origins"),
        (DistanceMatrixRequest.between(["A"], []), "destinations"),
        (DistanceMatrixRequest.between([f"O{index}" for index in range(26)], ["B"]), "at most 25"),
        (
            DistanceMatrixRequest.between([f"O{index}" for index in range(11)], [f"D{index}" for index in range(10)]),
            "exceeds the limit of 100",
        ),
        (DistanceMatrixRequest.between(["A"], ["B"]).withArrivalTime(1).withDepartureTime(2), "mutually exclusive"),
        (DistanceMatrixRequest.between(["A"], ["B"]).withMode("driving").withArrivalTime(1), "transit or unset"),
        (DistanceMatrixRequest.between(["A"], ["B"]).withTrafficModel("best_guess"), "requires departure_time"),
        (DistanceMatrixRequest.between(["A"], [42]), "item 0"),  # type: ignore[list-item]
    ],
)
def test_invalid_requests(request_, message):
    with pytest.raises(ValidationError, match=message):
        request_.describe()


def test_matrix_of_exactly_100_elements_is_allowed():
    request = DistanceMatrixRequest.between([f"O{index}" for index in range(10)], [f"D{index}" for index in range(10)])
    assert len(request.describe().params) == 2


def test_arrival_time_without_mode_is_allowed():
    params = dict(DistanceMatrixRequest.between(["A"], ["B"]).withArrivalTime(1343641500).describe().params)
    assert params["arrival_time"] == "1343641500"
