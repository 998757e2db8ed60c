"""
Tests for response envelope decoding, dood!
"""

import json

import pytest

from lib.google_maps.decoder import Outcome, ResponseDecoder, ResponseSchema, gridElements, listElements
from lib.google_maps.enum_codec import isUnrecognized
from lib.google_maps.enums import ElementStatus, Status
from lib.google_maps.exceptions import ApiError, ApiErrorKind, DecodeError

MATRIX_SCHEMA = ResponseSchema(resultsKey="rows", elements=gridElements())


def element(status: str, distance: int = 0, duration: int = 0) -> dict:
    if status != "OK":
        return {"status": status}
    return {
        "status": "OK",
        "distance": {"text": f"{distance / 1000} km", "value": distance},
        "duration": {"text": f"{duration // 60} mins", "value": duration},
    }


@pytest.fixture
def decoder() -> ResponseDecoder:
    return ResponseDecoder()


def test_partial_matrix_failure(decoder):
    """One unreachable pair out of four does not fail the envelope, dood!"""
    body = json.dumps(
        {
            "status": "OK",
            "origin_addresses": ["Vancouver, BC, Canada", "Seattle, WA, USA"],
            "destination_addresses": ["San Francisco, CA, USA", "Victoria, BC, Canada"],
            "rows": [
                {"elements": [element("OK", 1528000, 54000), element("OK", 114000, 11000)]},
                {"elements": [element("OK", 1299000, 46000), element("NOT_FOUND")]},
            ],
        }
    )

    envelope = decoder.decode(body, MATRIX_SCHEMA)

    assert envelope.status is Status.OK
    assert envelope.outcome == Outcome.OK
    assert len(envelope.results) == 2
    assert len(envelope.elements) == 4

    failed = envelope.failedElements()
    assert len(failed) == 1
    assert failed[0].status is ElementStatus.NOT_FOUND
    assert (failed[0].row, failed[0].column, failed[0].index) == (1, 1, 3)

    succeeded = [item for item in envelope.elements if item.isOk]
    assert len(succeeded) == 3
    for item in succeeded:
        assert item.data["distance"]["value"] > 0
        assert item.data["duration"]["value"] > 0

    grid = envelope.grid()
    assert [[item.outcome for item in row] for row in grid] == [
        [Outcome.OK, Outcome.OK],
        [Outcome.OK, Outcome.ERROR],
    ]


def test_element_zero_results_is_empty_not_error(decoder):
    body = json.dumps({"status": "OK", "rows": [{"elements": [element("ZERO_RESULTS")]}]})

    envelope = decoder.decode(body, MATRIX_SCHEMA)

    assert envelope.elements[0].outcome == Outcome.EMPTY
    assert envelope.failedElements() == []


def test_unknown_element_status_is_error(decoder):
    body = json.dumps({"status": "OK", "rows": [{"elements": [{"status": "TELEPORTED"}]}]})

    envelope = decoder.decode(body, MATRIX_SCHEMA)

    assert isUnrecognized(envelope.elements[0].status)
    assert envelope.elements[0].outcome == Outcome.ERROR


@pytest.mark.parametrize("status", ["ZERO_RESULTS", "DATA_NOT_AVAILABLE"])
def test_empty_statuses(decoder, status):
    """No matches is a valid answer, not an error, dood!"""
    envelope = decoder.decode(json.dumps({"status": status, "results": []}), ResponseSchema())

    assert envelope.isEmpty
    assert envelope.results == []


@pytest.mark.parametrize(
    "status, kind, retryable",
    [
        ("OVER_QUERY_LIMIT", ApiErrorKind.OVER_QUERY_LIMIT, False),
        ("OVER_DAILY_LIMIT", ApiErrorKind.OVER_DAILY_LIMIT, False),
        ("REQUEST_DENIED", ApiErrorKind.REQUEST_DENIED, False),
        ("INVALID_REQUEST", ApiErrorKind.INVALID_REQUEST, False),
        ("NOT_FOUND", ApiErrorKind.NOT_FOUND, False),
        ("MAX_ELEMENTS_EXCEEDED", ApiErrorKind.MAX_ELEMENTS_EXCEEDED, False),
        ("UNKNOWN_ERROR", ApiErrorKind.UNKNOWN_ERROR, True),
    ],
)
def test_error_statuses(decoder, status, kind, retryable):
    body = json.dumps({"status": status, "error_message": "Something went wrong", "results": []})

    with pytest.raises(ApiError) as excInfo:
        decoder.decode(body, ResponseSchema())

    assert excInfo.value.kind == kind
    assert excInfo.value.status == status
    assert excInfo.value.errorMessage == "Something went wrong"
    assert excInfo.value.retryable is retryable
    assert str(excInfo.value) == f"API returned {status}: Something went wrong"


def test_unrecognized_envelope_status(decoder):
    """A status token this client has never seen is a terminal error, dood!"""
    with pytest.raises(ApiError) as excInfo:
        decoder.decode(b'{"status": "BRAND_NEW_STATUS"}', ResponseSchema())

    assert excInfo.value.kind == ApiErrorKind.UNRECOGNIZED
    assert excInfo.value.status == "BRAND_NEW_STATUS"
    assert not excInfo.value.retryable


@pytest.mark.parametrize(
    "body",
    [
        b"<html>502 Bad Gateway</html>",
        b'{"status": "OK", "results": [',
        b"\xff\xfe\x00",
        b"[1, 2, 3]",
        b'{"results": []}',
        b'{"status": 42}',
    ],
)
def test_malformed_bodies(decoder, body):
    with pytest.raises(DecodeError) as excInfo:
        decoder.decode(body, ResponseSchema())
    assert not excInfo.value.retryable
    assert excInfo.value.body is not None


def test_results_of_wrong_type(decoder):
    with pytest.raises(DecodeError, match="'results' is not a list"):
        decoder.decode('{"status": "OK", "results": "nope"}', ResponseSchema())


def test_malformed_rows(decoder):
    with pytest.raises(DecodeError):
        decoder.decode('{"status": "OK", "rows": [{"no_elements": []}]}', MATRIX_SCHEMA)
    with pytest.raises(DecodeError):
        decoder.decode('{"status": "OK", "rows": [{"elements": [{"distance": 1}]}]}', MATRIX_SCHEMA)


def test_object_result_without_list(decoder):
    """Time zone style answers: the object itself is the result."""
    body = {"status": "OK", "dstOffset": 0, "rawOffset": -28800, "timeZoneId": "America/Los_Angeles"}

    envelope = decoder.decode(json.dumps(body), ResponseSchema(resultsKey=None))

    assert envelope.results == []
    assert envelope.data["timeZoneId"] == "America/Los_Angeles"


def test_camel_case_error_message(decoder):
    with pytest.raises(ApiError) as excInfo:
        decoder.decode('{"status": "INVALID_REQUEST", "errorMessage": "Invalid timestamp"}', ResponseSchema())
    assert excInfo.value.errorMessage == "Invalid timestamp"


def test_single_result_object_is_wrapped(decoder):
    envelope = decoder.decode('{"status": "OK", "result": {"name": "Sydney"}}', ResponseSchema(resultsKey="result"))
    assert envelope.results == [{"name": "Sydney"}]


def test_geocoded_waypoints(decoder):
    """Directions report per-waypoint geocoding status independently, dood!"""
    schema = ResponseSchema(resultsKey="routes", elements=listElements("geocoded_waypoints", "geocoder_status"))
    body = {
        "status": "OK",
        "geocoded_waypoints": [
            {"geocoder_status": "OK", "place_id": "a"},
            {"geocoder_status": "ZERO_RESULTS"},
        ],
        "routes": [{"summary": "I-5 S"}],
    }

    envelope = decoder.decode(json.dumps(body), schema)

    assert [item.outcome for item in envelope.elements] == [Outcome.OK, Outcome.EMPTY]
    assert envelope.results == [{"summary": "I-5 S"}]
    assert envelope.rawStatus == "OK"


def test_schema_without_status_field(decoder):
    """Status-less APIs are OK with results and ZERO_RESULTS without, dood!"""
    schema = ResponseSchema(resultsKey="places", statusKey=None)

    envelope = decoder.decode(json.dumps({"places": [{"id": "a"}], "nextPageToken": "t"}), schema)
    assert envelope.status is Status.OK
    assert envelope.results == [{"id": "a"}]

    empty = decoder.decode(b"{}", schema)
    assert empty.status is Status.ZERO_RESULTS
    assert empty.isEmpty
