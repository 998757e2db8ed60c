"""
Query string assembly.

A :class:`QueryAssembler` is built once per endpoint from an ordered list of
:class:`QueryField` declarations and cross-field rules. ``assemble()`` turns
a mapping of field values into a validated, canonical parameter list: fields
appear in declaration order whatever the order the caller supplied them in,
each value is serialized and percent-encoded, and the credential is appended
last. Any problem raises :class:`ValidationError` before a request exists.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote

from .constants import API_BASE_URL, COMMA_SEPARATOR, CREDENTIAL_PARAM, MASKED_CREDENTIAL, PIPE_SEPARATOR
from .enums import Api
from .exceptions import ValidationError
from .latlng import formatDecimal

logger = logging.getLogger(__name__)

# Returns an error message, or None when the value is acceptable
Validator = Callable[[Any], Optional[str]]
Serializer = Callable[[Any], str]
# Receives the present field values, returns an error message or None
Rule = Callable[[Mapping[str, Any]], Optional[str]]

QueryParams = Tuple[Tuple[str, str], ...]


def serializeScalar(value: Any) -> str:
    """Serialize one value into its (unencoded) wire form.

    Handles booleans, enums and unrecognized tokens, decimals, datetimes
    (as Unix seconds) and any object exposing ``toQuery()``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, str):
        return str.__str__(value)
    if isinstance(value, Decimal):
        return formatDecimal(value)
    if isinstance(value, datetime):
        return str(int(value.timestamp()))
    toQuery = getattr(value, "toQuery", None)
    if callable(toQuery):
        return toQuery()
    return str(value)


def joinWith(separator: str, itemSerializer: Serializer = serializeScalar) -> Serializer:
    """Serializer for list valued fields."""

    def serialize(values: Iterable[Any]) -> str:
        return separator.join(itemSerializer(value) for value in values)

    return serialize


pipeJoined = joinWith(PIPE_SEPARATOR)
commaJoined = joinWith(COMMA_SEPARATOR)


def encodeComponent(value: str) -> str:
    """Percent-encode a query component, keeping only RFC 3986 unreserved characters."""
    return quote(value, safe="")


def isPresent(value: Any) -> bool:
    """None and empty collections count as absent; empty strings are present."""
    if value is None:
        return False
    if isinstance(value, (list, tuple, set, frozenset)) and len(value) == 0:
        return False
    return True


@dataclass(frozen=True)
class QueryField:
    """
    Declaration of one query parameter.

    Attributes:
        name: Parameter name on the wire
        serializer: Converts the value into its unencoded string form
        validator: Returns an error message for an unacceptable value
        required: Whether the field must be present
    """

    name: str
    serializer: Serializer = serializeScalar
    validator: Optional[Validator] = None
    required: bool = False


@dataclass(frozen=True)
class QueryAssembler:
    """Validates and serializes field values in a fixed order, dood!

    Example:
        >>> assembler = QueryAssembler(
        ...     fields=(
        ...         QueryField("location", required=True),
        ...         QueryField("timestamp", required=True),
        ...         QueryField("language"),
        ...     ),
        ... )
        >>> assembler.assemble({"timestamp": 1331161200, "location": LatLng(39.6034810, -119.6822510)})
        (('location', '39.603481%2C-119.682251'), ('timestamp', '1331161200'))
    """

    fields: Tuple[QueryField, ...]
    rules: Tuple[Rule, ...] = field(default=())

    def __post_init__(self):
        names = [queryField.name for queryField in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate query field names in {names}")

    @property
    def fieldNames(self) -> List[str]:
        return [queryField.name for queryField in self.fields]

    def validate(self, values: Mapping[str, Any]) -> Mapping[str, Any]:
        """
        Check presence, per-field validators and cross-field rules.

        Returns:
            Present values only, keyed by field name

        Raises:
            ValidationError: On the first problem found
        """
        unknown = set(values) - set(self.fieldNames)
        if unknown:
            raise ValidationError(f"Unknown query fields: {', '.join(sorted(unknown))}")

        present = {name: value for name, value in values.items() if isPresent(value)}

        for queryField in self.fields:
            if queryField.name not in present:
                if queryField.required:
                    raise ValidationError(f"Required field '{queryField.name}' is missing", queryField.name)
                continue

            if queryField.validator is not None:
                error = queryField.validator(present[queryField.name])
                if error is not None:
                    raise ValidationError(f"Invalid '{queryField.name}': {error}", queryField.name)

        for rule in self.rules:
            error = rule(present)
            if error is not None:
                raise ValidationError(error)

        return present

    def assemble(self, values: Mapping[str, Any]) -> QueryParams:
        """
        Validate values and serialize them in declaration order.

        Returns:
            Tuple of (name, percent-encoded value) pairs

        Raises:
            ValidationError: If validation fails
        """
        present = self.validate(values)
        return tuple(
            (queryField.name, encodeComponent(queryField.serializer(present[queryField.name])))
            for queryField in self.fields
            if queryField.name in present
        )


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Fully validated request, ready to be sent.

    Attributes:
        api: API group used for rate limiting
        path: Endpoint path relative to baseUrl
        params: Encoded query parameters in canonical order
        baseUrl: Scheme and host part of the URL
        method: HTTP method, ``GET`` or ``POST``
        body: JSON body of a ``POST`` request
        headers: Extra HTTP headers in canonical order
        credentialHeader: Header carrying the credential instead of ``key=``
    """

    api: Api
    path: str
    params: QueryParams
    baseUrl: str = API_BASE_URL
    method: str = "GET"
    body: Optional[Dict[str, Any]] = None
    headers: Tuple[Tuple[str, str], ...] = ()
    credentialHeader: Optional[str] = None

    def __post_init__(self):
        if self.method not in ("GET", "POST"):
            raise ValueError(f"Unsupported HTTP method {self.method}")

    def queryString(self, credential: Optional[str] = None) -> str:
        """Canonical query string, with ``key=<credential>`` appended last."""
        pairs = [f"{name}={value}" for name, value in self.params]
        if credential is not None and self.credentialHeader is None:
            pairs.append(f"{CREDENTIAL_PARAM}={encodeComponent(credential)}")
        return "&".join(pairs)

    def url(self, credential: Optional[str] = None) -> str:
        query = self.queryString(credential)
        return f"{self.baseUrl}{self.path}?{query}" if query else f"{self.baseUrl}{self.path}"

    def maskedUrl(self) -> str:
        """URL safe for logs, with the credential masked."""
        return self.url(MASKED_CREDENTIAL)

    def httpHeaders(self, credential: Optional[str] = None) -> Dict[str, str]:
        """Extra headers, plus the credential header where the endpoint wants one."""
        headers = dict(self.headers)
        if credential is not None and self.credentialHeader is not None:
            headers[self.credentialHeader] = credential
        return headers


# Validators


def nonEmptyString(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return "must be a non-empty string"
    return None


def inRange(minimum: float, maximum: float) -> Validator:
    """Validator for numbers within [minimum, maximum]."""

    def validate(value: Any) -> Optional[str]:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            return f"must be a number, got {value!r}"
        if not minimum <= value <= maximum:
            return f"must be within [{minimum}, {maximum}], got {value}"
        return None

    return validate


def itemCount(minimum: int = 0, maximum: Optional[int] = None) -> Validator:
    """Validator for list lengths."""

    def validate(value: Any) -> Optional[str]:
        count = len(value)
        if count < minimum:
            return f"needs at least {minimum} items, got {count}"
        if maximum is not None and count > maximum:
            return f"allows at most {maximum} items, got {count}"
        return None

    return validate


def eachItem(validator: Validator) -> Validator:
    """Apply a validator to every item of a list."""

    def validate(values: Any) -> Optional[str]:
        for index, value in enumerate(values):
            error = validator(value)
            if error is not None:
                return f"item {index} {error}"
        return None

    return validate


def allOf(*validators: Validator) -> Validator:
    def validate(value: Any) -> Optional[str]:
        for validator in validators:
            error = validator(value)
            if error is not None:
                return error
        return None

    return validate


# Cross-field rules


def mutuallyExclusive(*names: str) -> Rule:
    """At most one of the fields may be present."""

    def rule(present: Mapping[str, Any]) -> Optional[str]:
        supplied = [name for name in names if name in present]
        if len(supplied) > 1:
            return f"Fields {', '.join(supplied)} are mutually exclusive"
        return None

    return rule


def atLeastOneOf(*names: str) -> Rule:
    def rule(present: Mapping[str, Any]) -> Optional[str]:
        if not any(name in present for name in names):
            return f"One of {', '.join(names)} is required"
        return None

    return rule


def exactlyOneOf(*names: str) -> Rule:
    exclusive = mutuallyExclusive(*names)
    required = atLeastOneOf(*names)

    def rule(present: Mapping[str, Any]) -> Optional[str]:
        return exclusive(present) or required(present)

    return rule


def requires(name: str, dependency: str) -> Rule:
    """``name`` may only be present together with ``dependency``."""

    def rule(present: Mapping[str, Any]) -> Optional[str]:
        if name in present and dependency not in present:
            return f"Field {name} requires {dependency}"
        return None

    return rule


def onlyWhen(names: Sequence[str], condition: Callable[[Mapping[str, Any]], bool], description: str) -> Rule:
    """Fields in ``names`` are only allowed when ``condition`` holds."""

    def rule(present: Mapping[str, Any]) -> Optional[str]:
        if condition(present):
            return None
        supplied = [name for name in names if name in present]
        if supplied:
            return f"Fields {', '.join(supplied)} are only allowed {description}"
        return None

    return rule
