"""
Tests for the error taxonomy, dood!
"""

import pytest

from lib.google_maps.enum_codec import Unrecognized
from lib.google_maps.enums import Status
from lib.google_maps.exceptions import (
    ApiError,
    ApiErrorKind,
    ConfigurationError,
    DecodeError,
    GoogleMapsError,
    HttpStatusError,
    RetriesExhausted,
    TransportError,
    ValidationError,
    classifyStatus,
    parseHttpError,
)


def test_hierarchy():
    for errorClass in (ValidationError, ConfigurationError, TransportError, ApiError, DecodeError, RetriesExhausted):
        assert issubclass(errorClass, GoogleMapsError)
    assert issubclass(HttpStatusError, TransportError)


def test_retryable_flags():
    """Only transport problems and UNKNOWN_ERROR are worth repeating, dood!"""
    assert TransportError("Connection reset").retryable
    assert not ValidationError("bad").retryable
    assert not ConfigurationError("bad").retryable
    assert not DecodeError("bad").retryable
    assert ApiError(ApiErrorKind.UNKNOWN_ERROR, "UNKNOWN_ERROR").retryable
    assert not ApiError(ApiErrorKind.OVER_QUERY_LIMIT, "OVER_QUERY_LIMIT").retryable


@pytest.mark.parametrize(
    "statusCode, retryable",
    [(500, True), (502, True), (503, True), (504, True), (429, True), (400, False), (403, False), (404, False)],
)
def test_http_status_classification(statusCode, retryable):
    assert HttpStatusError(statusCode).retryable is retryable


def test_parse_http_error():
    error = parseHttpError(503, "  Service Unavailable \n")
    assert error.statusCode == 503
    assert str(error) == "HTTP status 503: Service Unavailable"

    assert str(parseHttpError(500, "")) == "HTTP status 500"


def test_classify_status():
    assert classifyStatus(Status.OK) is None
    assert classifyStatus(Status.ZERO_RESULTS) is None
    assert classifyStatus(Status.DATA_NOT_AVAILABLE) is None

    error = classifyStatus(Status.REQUEST_DENIED, "The provided API key is invalid.")
    assert error is not None
    assert error.kind == ApiErrorKind.REQUEST_DENIED
    assert str(error) == "API returned REQUEST_DENIED: The provided API key is invalid."

    unknown = classifyStatus(Unrecognized("SOMETHING_NEW", "Status"))
    assert unknown is not None
    assert unknown.kind == ApiErrorKind.UNRECOGNIZED
    assert unknown.status == "SOMETHING_NEW"


def test_every_error_status_has_a_kind():
    """Every non-success status maps onto its own error kind, dood!"""
    for status in Status:
        error = classifyStatus(status)
        if error is not None:
            assert error.kind.value == status.value


def test_retries_exhausted_keeps_last_cause():
    cause = HttpStatusError(503, response={"status": "UNKNOWN_ERROR"})
    error = RetriesExhausted(4, cause)

    assert error.attempts == 4
    assert error.lastCause is cause
    assert error.response == {"status": "UNKNOWN_ERROR"}
    assert str(error) == "Request failed after 4 attempts: HTTP status 503"
    assert not error.retryable


def test_validation_error_field():
    error = ValidationError("Invalid 'radius'", "radius")
    assert error.field == "radius"
    assert str(error) == "Invalid 'radius'"
