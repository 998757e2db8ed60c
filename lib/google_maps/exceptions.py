"""
Google Maps Client Exceptions

This module contains the exception hierarchy raised by the request engine.
Every exception exposes ``retryable`` so the retry executor can decide
whether another attempt may succeed.
"""

import logging
from enum import StrEnum
from typing import Any, Dict, Optional, Union

from .enum_codec import Unrecognized
from .enums import Status

logger = logging.getLogger(__name__)


class ApiErrorKind(StrEnum):
    """Server reported failure conditions."""

    OVER_QUERY_LIMIT = "OVER_QUERY_LIMIT"
    OVER_DAILY_LIMIT = "OVER_DAILY_LIMIT"
    REQUEST_DENIED = "REQUEST_DENIED"
    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    MAX_ELEMENTS_EXCEEDED = "MAX_ELEMENTS_EXCEEDED"
    MAX_DIMENSIONS_EXCEEDED = "MAX_DIMENSIONS_EXCEEDED"
    MAX_WAYPOINTS_EXCEEDED = "MAX_WAYPOINTS_EXCEEDED"
    MAX_ROUTE_LENGTH_EXCEEDED = "MAX_ROUTE_LENGTH_EXCEEDED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    # Status token this client does not know
    UNRECOGNIZED = "UNRECOGNIZED"


class GoogleMapsError(Exception):
    """Base exception class for all Google Maps client errors, dood!

    Attributes:
        message: Human-readable error message
        response: Raw response payload (if available)
    """

    def __init__(self, message: str, response: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.response = response

    @property
    def retryable(self) -> bool:
        """Whether repeating the same request may succeed."""
        return False

    def __str__(self) -> str:
        return self.message


class ValidationError(GoogleMapsError):
    """Raised when caller input is rejected before any network call.

    This occurs when a required field is missing, mutually exclusive fields
    are both set, or a field value is out of range.

    Attributes:
        field: Name of the offending query field (if a single field is at fault)
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class ConfigurationError(GoogleMapsError):
    """Raised when the client is misconfigured.

    This occurs when the credential is empty or a configuration section
    holds invalid values.
    """


class TransportError(GoogleMapsError):
    """Raised when the HTTP exchange itself fails.

    This includes connection failures, DNS resolution failures and
    timeouts. Always retryable.
    """

    @property
    def retryable(self) -> bool:
        return True


class HttpStatusError(TransportError):
    """Raised when the server answers with a non-2xx HTTP status.

    Server side failures (5xx) and throttling (429) are transient,
    every other status is terminal.

    Attributes:
        statusCode: HTTP status code
    """

    def __init__(self, statusCode: int, message: Optional[str] = None, response: Optional[Dict[str, Any]] = None):
        super().__init__(message or f"HTTP status {statusCode}", response)
        self.statusCode = statusCode

    @property
    def retryable(self) -> bool:
        return self.statusCode == 429 or 500 <= self.statusCode < 600


class ApiError(GoogleMapsError):
    """Raised when the response envelope reports an error status.

    Only ``UNKNOWN_ERROR`` (a server side hiccup) is retryable; quota,
    permission and argument problems will not go away on their own.

    Attributes:
        kind: Classified error kind
        status: Raw status token as sent by the server
        errorMessage: Server supplied ``error_message`` (if any)
    """

    def __init__(
        self,
        kind: ApiErrorKind,
        status: str,
        errorMessage: Optional[str] = None,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = f"API returned {status}"
        if errorMessage:
            message = f"{message}: {errorMessage}"
        super().__init__(message, response)
        self.kind = kind
        self.status = status
        self.errorMessage = errorMessage

    @property
    def retryable(self) -> bool:
        return self.kind == ApiErrorKind.UNKNOWN_ERROR


class DecodeError(GoogleMapsError):
    """Raised when a response body is malformed or has an unexpected shape.

    Attributes:
        body: Beginning of the offending body, for diagnostics
    """

    def __init__(self, message: str, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.body = body


class RetriesExhausted(GoogleMapsError):
    """Raised when every permitted attempt failed with a transient error.

    Attributes:
        attempts: Number of attempts made
        lastCause: Error raised by the final attempt
    """

    def __init__(self, attempts: int, lastCause: GoogleMapsError) -> None:
        super().__init__(f"Request failed after {attempts} attempts: {lastCause}", lastCause.response)
        self.attempts = attempts
        self.lastCause = lastCause


def classifyStatus(
    status: Union[Status, Unrecognized],
    errorMessage: Optional[str] = None,
    response: Optional[Dict[str, Any]] = None,
) -> Optional[ApiError]:
    """Map an envelope status onto an ApiError.

    Args:
        status: Decoded top level status
        errorMessage: Server supplied ``error_message``
        response: Raw response payload

    Returns:
        None for successful statuses (``OK``, ``ZERO_RESULTS``,
        ``DATA_NOT_AVAILABLE``), otherwise the matching ApiError

    Example:
        >>> error = classifyStatus(Status.OVER_QUERY_LIMIT, "You have exceeded your rate-limit")
        >>> error.kind, error.retryable
        (<ApiErrorKind.OVER_QUERY_LIMIT: 'OVER_QUERY_LIMIT'>, False)
    """
    if isinstance(status, Unrecognized):
        return ApiError(ApiErrorKind.UNRECOGNIZED, status.token, errorMessage, response)

    if status in (Status.OK, Status.ZERO_RESULTS, Status.DATA_NOT_AVAILABLE):
        return None

    return ApiError(ApiErrorKind(status.value), status.value, errorMessage, response)


def parseHttpError(statusCode: int, body: str) -> HttpStatusError:
    """Build an HttpStatusError for a non-2xx answer.

    Args:
        statusCode: HTTP status code
        body: Response body text

    Returns:
        HttpStatusError with a short body excerpt as the message
    """
    excerpt = body.strip()[:200]
    message = f"HTTP status {statusCode}: {excerpt}" if excerpt else None
    return HttpStatusError(statusCode, message)
