"""
Google Maps Platform Constants

This module contains endpoint URLs, API limits and client defaults.
"""

from typing import Final

VERSION: Final[str] = "0.1.0"

# API Configuration
API_BASE_URL: Final[str] = "https://maps.googleapis.com/maps/api"
CREDENTIAL_PARAM: Final[str] = "key"
MASKED_CREDENTIAL: Final[str] = "***"

# Places API (New) lives on its own host, takes a JSON body and the key in a header
PLACES_NEW_BASE_URL: Final[str] = "https://places.googleapis.com/v1"
CREDENTIAL_HEADER: Final[str] = "X-Goog-Api-Key"
FIELD_MASK_HEADER: Final[str] = "X-Goog-FieldMask"

# Endpoint paths (relative to API_BASE_URL)
ENDPOINT_DIRECTIONS: Final[str] = "/directions/json"
ENDPOINT_DISTANCE_MATRIX: Final[str] = "/distancematrix/json"
ENDPOINT_ELEVATION: Final[str] = "/elevation/json"
ENDPOINT_GEOCODE: Final[str] = "/geocode/json"
ENDPOINT_TIME_ZONE: Final[str] = "/timezone/json"
ENDPOINT_PLACES_TEXT_SEARCH: Final[str] = "/place/textsearch/json"
ENDPOINT_PLACES_NEARBY_SEARCH: Final[str] = "/place/nearbysearch/json"
ENDPOINT_PLACES_NEW_TEXT_SEARCH: Final[str] = "/places:searchText"

# Client defaults
DEFAULT_TIMEOUT: Final[float] = 10.0
DEFAULT_MAX_ATTEMPTS: Final[int] = 4
DEFAULT_BASE_DELAY: Final[float] = 1.0
DEFAULT_MAX_DELAY: Final[float] = 32.0

# Query list separators
PIPE_SEPARATOR: Final[str] = "|"
COMMA_SEPARATOR: Final[str] = ","

# Coordinates
COORDINATE_PLACES: Final[int] = 7
MIN_LATITUDE: Final[int] = -90
MAX_LATITUDE: Final[int] = 90
MIN_LONGITUDE: Final[int] = -180
MAX_LONGITUDE: Final[int] = 180

# API Limits
MAX_WAYPOINTS: Final[int] = 25
MAX_MATRIX_ORIGINS: Final[int] = 25
MAX_MATRIX_DESTINATIONS: Final[int] = 25
MAX_MATRIX_ELEMENTS: Final[int] = 100
MIN_ELEVATION_SAMPLES: Final[int] = 2
MAX_ELEVATION_SAMPLES: Final[int] = 512
MIN_PRICE_LEVEL: Final[int] = 0
MAX_PRICE_LEVEL: Final[int] = 4
MAX_PLACES_RADIUS: Final[int] = 50000
MAX_PLACES_NEW_RESULTS: Final[int] = 20
MAX_PLACES_NEW_RATING: Final[float] = 5.0
