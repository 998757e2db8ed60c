"""
Response envelope decoding.

Every Google Maps web service answers with a JSON object carrying a top
level ``status`` token, an optional ``error_message`` and an endpoint
specific results field. Batch endpoints additionally give every element
(matrix cell, geocoded waypoint) its own status. The envelope status and
element statuses are classified independently: a failed element never
turns a successful envelope into an error, and never makes a call retryable.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .enum_codec import Unrecognized
from .enums import ELEMENT_STATUSES, STATUSES, ElementStatus, Status
from .exceptions import DecodeError, classifyStatus

logger = logging.getLogger(__name__)

# Length of body excerpts attached to DecodeError
_EXCERPT_LENGTH = 200


class Outcome(StrEnum):
    """Classification of an envelope or an element."""

    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class ElementResult:
    """
    One element of a batch response.

    Attributes:
        index: Position in the flattened element sequence
        status: Decoded element status
        data: Raw element object
        row: Row number for matrix responses (origin index)
        column: Column number for matrix responses (destination index)
    """

    index: int
    status: Union[ElementStatus, Unrecognized]
    data: Dict[str, Any]
    row: Optional[int] = None
    column: Optional[int] = None

    @property
    def outcome(self) -> Outcome:
        if self.status is ElementStatus.OK:
            return Outcome.OK
        if self.status is ElementStatus.ZERO_RESULTS:
            return Outcome.EMPTY
        return Outcome.ERROR

    @property
    def isOk(self) -> bool:
        return self.outcome == Outcome.OK


@dataclass(frozen=True)
class ResponseEnvelope:
    """
    Decoded response.

    Attributes:
        status: Decoded top level status
        errorMessage: Server supplied message (if any)
        results: Items of the endpoint's results field
        elements: Per-element statuses of batch endpoints, in order
        data: Whole decoded JSON object
    """

    status: Union[Status, Unrecognized]
    errorMessage: Optional[str]
    results: List[Any]
    elements: Tuple[ElementResult, ...] = ()
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def rawStatus(self) -> str:
        return str.__str__(self.status)

    @property
    def outcome(self) -> Outcome:
        """OK or EMPTY; error statuses never produce an envelope."""
        if self.status in (Status.ZERO_RESULTS, Status.DATA_NOT_AVAILABLE):
            return Outcome.EMPTY
        return Outcome.OK

    @property
    def isEmpty(self) -> bool:
        return self.outcome == Outcome.EMPTY

    def failedElements(self) -> List[ElementResult]:
        return [element for element in self.elements if element.outcome == Outcome.ERROR]

    def grid(self) -> List[List[ElementResult]]:
        """Elements grouped by row (matrix responses)."""
        rows: List[List[ElementResult]] = []
        for element in self.elements:
            row = element.row if element.row is not None else 0
            while len(rows) <= row:
                rows.append([])
            rows[row].append(element)
        return rows


# Extracts element results from the decoded JSON object
ElementExtractor = Callable[[Dict[str, Any]], List[ElementResult]]


def _elementStatus(item: Any, statusKey: str, where: str) -> Union[ElementStatus, Unrecognized]:
    if not isinstance(item, dict):
        raise DecodeError(f"{where} is not an object")
    status = item.get(statusKey)
    if not isinstance(status, str):
        raise DecodeError(f"{where} has no '{statusKey}'")
    return ELEMENT_STATUSES.decode(status)


def gridElements(rowsKey: str = "rows", elementsKey: str = "elements", statusKey: str = "status") -> ElementExtractor:
    """Extractor for ``rows[i].elements[j].status`` shaped responses."""

    def extract(data: Dict[str, Any]) -> List[ElementResult]:
        rows = data.get(rowsKey, [])
        if not isinstance(rows, list):
            raise DecodeError(f"'{rowsKey}' is not a list")

        elements: List[ElementResult] = []
        for rowIndex, row in enumerate(rows):
            if not isinstance(row, dict) or not isinstance(row.get(elementsKey), list):
                raise DecodeError(f"{rowsKey}[{rowIndex}] has no '{elementsKey}' list")
            for columnIndex, item in enumerate(row[elementsKey]):
                where = f"{rowsKey}[{rowIndex}].{elementsKey}[{columnIndex}]"
                elements.append(
                    ElementResult(
                        index=len(elements),
                        status=_elementStatus(item, statusKey, where),
                        data=item,
                        row=rowIndex,
                        column=columnIndex,
                    )
                )
        return elements

    return extract


def listElements(key: str, statusKey: str = "status") -> ElementExtractor:
    """Extractor for ``key[i].<statusKey>`` shaped responses."""

    def extract(data: Dict[str, Any]) -> List[ElementResult]:
        items = data.get(key, [])
        if not isinstance(items, list):
            raise DecodeError(f"'{key}' is not a list")
        return [
            ElementResult(index=index, status=_elementStatus(item, statusKey, f"{key}[{index}]"), data=item)
            for index, item in enumerate(items)
        ]

    return extract


@dataclass(frozen=True)
class ResponseSchema:
    """
    Where an endpoint keeps its results.

    Attributes:
        resultsKey: Name of the results list, None when the object itself is the result
        elements: Extractor of per-element statuses for batch endpoints
        statusKey: Name of the status field, None for APIs that report errors
            through the HTTP status only (the status then follows the results)
    """

    resultsKey: Optional[str] = "results"
    elements: Optional[ElementExtractor] = None
    statusKey: Optional[str] = "status"


class ResponseDecoder:
    """Parses response bodies into envelopes, dood!

    Raises ApiError for error statuses, DecodeError for bodies that are not
    the expected JSON shape. Endpoints without a status field (Places API
    (New)) are OK when they return results and ZERO_RESULTS otherwise.
    """

    def decode(self, body: Union[bytes, str], schema: ResponseSchema) -> ResponseEnvelope:
        """
        Decode one response body.

        Args:
            body: Raw response body
            schema: Endpoint response layout

        Returns:
            Envelope with OK or EMPTY outcome

        Raises:
            ApiError: The envelope status is an error (or an unknown token)
            DecodeError: The body is malformed or has an unexpected shape
        """
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Invalid JSON response: {e}", self._excerpt(body)) from e

        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}", self._excerpt(body))

        # Time Zone API spells it errorMessage
        errorMessage = data.get("error_message", data.get("errorMessage"))
        status: Union[Status, Unrecognized] = Status.OK
        if schema.statusKey is not None:
            rawStatus = data.get(schema.statusKey)
            if not isinstance(rawStatus, str):
                raise DecodeError(f"Response has no '{schema.statusKey}' field", self._excerpt(body))
            status = STATUSES.decode(rawStatus)

            error = classifyStatus(status, errorMessage, data)
            if error is not None:
                logger.warning(f"API error: {error}")
                raise error

        results: List[Any] = []
        if schema.resultsKey is not None:
            rawResults = data.get(schema.resultsKey, [])
            if isinstance(rawResults, dict):
                rawResults = [rawResults]
            if not isinstance(rawResults, list):
                raise DecodeError(f"'{schema.resultsKey}' is not a list", self._excerpt(body))
            results = rawResults

        if schema.statusKey is None and not results:
            status = Status.ZERO_RESULTS

        elements: List[ElementResult] = []
        if schema.elements is not None:
            elements = schema.elements(data)
            failed = sum(1 for element in elements if element.outcome == Outcome.ERROR)
            if failed:
                logger.debug(f"{failed} of {len(elements)} elements failed, dood!")

        return ResponseEnvelope(
            status=status,
            errorMessage=errorMessage,
            results=results,
            elements=tuple(elements),
            data=data,
        )

    @staticmethod
    def _excerpt(body: Union[bytes, str]) -> str:
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        return body[:_EXCERPT_LENGTH]
