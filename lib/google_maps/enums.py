"""
Google Maps Platform vocabularies.

Each closed set of wire tokens is a StrEnum plus a module level EnumTable
built once at import time.
"""

from enum import StrEnum
from typing import Final

from .enum_codec import EnumTable


class Api(StrEnum):
    """API groups, used as rate limiter queue names."""

    ALL = "all"
    DIRECTIONS = "directions"
    DISTANCE_MATRIX = "distance_matrix"
    ELEVATION = "elevation"
    GEOCODING = "geocoding"
    TIME_ZONE = "time_zone"
    PLACES = "places"
    PLACES_NEW = "places_new"


class Status(StrEnum):
    """Top level ``status`` of a response envelope."""

    OK = "OK"
    ZERO_RESULTS = "ZERO_RESULTS"
    DATA_NOT_AVAILABLE = "DATA_NOT_AVAILABLE"
    INVALID_REQUEST = "INVALID_REQUEST"
    MAX_ELEMENTS_EXCEEDED = "MAX_ELEMENTS_EXCEEDED"
    MAX_DIMENSIONS_EXCEEDED = "MAX_DIMENSIONS_EXCEEDED"
    MAX_WAYPOINTS_EXCEEDED = "MAX_WAYPOINTS_EXCEEDED"
    MAX_ROUTE_LENGTH_EXCEEDED = "MAX_ROUTE_LENGTH_EXCEEDED"
    NOT_FOUND = "NOT_FOUND"
    OVER_DAILY_LIMIT = "OVER_DAILY_LIMIT"
    OVER_QUERY_LIMIT = "OVER_QUERY_LIMIT"
    REQUEST_DENIED = "REQUEST_DENIED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ElementStatus(StrEnum):
    """Status of one element in a batch response (matrix cell, geocoded waypoint)."""

    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    ZERO_RESULTS = "ZERO_RESULTS"
    MAX_ROUTE_LENGTH_EXCEEDED = "MAX_ROUTE_LENGTH_EXCEEDED"


class TravelMode(StrEnum):
    DRIVING = "driving"
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"


class UnitSystem(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class Avoid(StrEnum):
    """Route features to avoid (``avoid=tolls|ferries``)."""

    TOLLS = "tolls"
    HIGHWAYS = "highways"
    FERRIES = "ferries"
    INDOOR = "indoor"


class TrafficModel(StrEnum):
    BEST_GUESS = "best_guess"
    PESSIMISTIC = "pessimistic"
    OPTIMISTIC = "optimistic"


class TransitMode(StrEnum):
    BUS = "bus"
    SUBWAY = "subway"
    TRAIN = "train"
    TRAM = "tram"
    RAIL = "rail"


class TransitRoutePreference(StrEnum):
    LESS_WALKING = "less_walking"
    FEWER_TRANSFERS = "fewer_transfers"


class LocationType(StrEnum):
    """Accuracy of a geocoding result."""

    ROOFTOP = "ROOFTOP"
    RANGE_INTERPOLATED = "RANGE_INTERPOLATED"
    GEOMETRIC_CENTER = "GEOMETRIC_CENTER"
    APPROXIMATE = "APPROXIMATE"


class RankBy(StrEnum):
    PROMINENCE = "prominence"
    DISTANCE = "distance"


class Language(StrEnum):
    """Languages the API can localise results into."""

    AF = "af"
    SQ = "sq"
    AM = "am"
    AR = "ar"
    HY = "hy"
    AZ = "az"
    EU = "eu"
    BE = "be"
    BN = "bn"
    BS = "bs"
    BG = "bg"
    MY = "my"
    CA = "ca"
    ZH = "zh"
    ZH_HK = "zh-HK"
    ZH_CN = "zh-CN"
    ZH_TW = "zh-TW"
    ZH_HANT = "zh-Hant"
    HR = "hr"
    CS = "cs"
    DA = "da"
    NL = "nl"
    EN = "en"
    EN_AU = "en-AU"
    EN_CA = "en-CA"
    EN_GB = "en-GB"
    EN_US = "en-US"
    ET = "et"
    FA = "fa"
    FI = "fi"
    FIL = "fil"
    FR = "fr"
    FR_CA = "fr-CA"
    GL = "gl"
    KA = "ka"
    DE = "de"
    EL = "el"
    GU = "gu"
    IW = "iw"
    HI = "hi"
    HU = "hu"
    IS = "is"
    ID = "id"
    IT = "it"
    JA = "ja"
    KN = "kn"
    KK = "kk"
    KM = "km"
    KO = "ko"
    KY = "ky"
    LO = "lo"
    LV = "lv"
    LT = "lt"
    MK = "mk"
    MS = "ms"
    ML = "ml"
    MR = "mr"
    MN = "mn"
    NE = "ne"
    NO = "no"
    PL = "pl"
    PT = "pt"
    PT_BR = "pt-BR"
    PT_PT = "pt-PT"
    PA = "pa"
    RO = "ro"
    RU = "ru"
    SR = "sr"
    SI = "si"
    SK = "sk"
    SL = "sl"
    ES = "es"
    ES_419 = "es-419"
    SW = "sw"
    SV = "sv"
    TA = "ta"
    TE = "te"
    TH = "th"
    TR = "tr"
    UK = "uk"
    UR = "ur"
    UZ = "uz"
    VI = "vi"
    ZU = "zu"


class PlaceType(StrEnum):
    """Place and address component types."""

    ACCOUNTING = "accounting"
    AIRPORT = "airport"
    AMUSEMENT_PARK = "amusement_park"
    AQUARIUM = "aquarium"
    ART_GALLERY = "art_gallery"
    ATM = "atm"
    BAKERY = "bakery"
    BANK = "bank"
    BAR = "bar"
    BEAUTY_SALON = "beauty_salon"
    BICYCLE_STORE = "bicycle_store"
    BOOK_STORE = "book_store"
    BOWLING_ALLEY = "bowling_alley"
    BUS_STATION = "bus_station"
    CAFE = "cafe"
    CAMPGROUND = "campground"
    CAR_DEALER = "car_dealer"
    CAR_RENTAL = "car_rental"
    CAR_REPAIR = "car_repair"
    CAR_WASH = "car_wash"
    CASINO = "casino"
    CEMETERY = "cemetery"
    CHURCH = "church"
    CITY_HALL = "city_hall"
    CLOTHING_STORE = "clothing_store"
    CONVENIENCE_STORE = "convenience_store"
    COURTHOUSE = "courthouse"
    DENTIST = "dentist"
    DEPARTMENT_STORE = "department_store"
    DOCTOR = "doctor"
    DRUGSTORE = "drugstore"
    ELECTRICIAN = "electrician"
    ELECTRONICS_STORE = "electronics_store"
    EMBASSY = "embassy"
    FIRE_STATION = "fire_station"
    FLORIST = "florist"
    FUNERAL_HOME = "funeral_home"
    FURNITURE_STORE = "furniture_store"
    GAS_STATION = "gas_station"
    GROCERY_OR_SUPERMARKET = "grocery_or_supermarket"
    GYM = "gym"
    HAIR_CARE = "hair_care"
    HARDWARE_STORE = "hardware_store"
    HINDU_TEMPLE = "hindu_temple"
    HOME_GOODS_STORE = "home_goods_store"
    HOSPITAL = "hospital"
    INSURANCE_AGENCY = "insurance_agency"
    JEWELRY_STORE = "jewelry_store"
    LAUNDRY = "laundry"
    LAWYER = "lawyer"
    LIBRARY = "library"
    LIGHT_RAIL_STATION = "light_rail_station"
    LIQUOR_STORE = "liquor_store"
    LOCAL_GOVERNMENT_OFFICE = "local_government_office"
    LOCKSMITH = "locksmith"
    LODGING = "lodging"
    MEAL_DELIVERY = "meal_delivery"
    MEAL_TAKEAWAY = "meal_takeaway"
    MOSQUE = "mosque"
    MOVIE_RENTAL = "movie_rental"
    MOVIE_THEATER = "movie_theater"
    MOVING_COMPANY = "moving_company"
    MUSEUM = "museum"
    NIGHT_CLUB = "night_club"
    PAINTER = "painter"
    PARK = "park"
    PARKING = "parking"
    PET_STORE = "pet_store"
    PHARMACY = "pharmacy"
    PHYSIOTHERAPIST = "physiotherapist"
    PLUMBER = "plumber"
    PLUS_CODE = "plus_code"
    POLICE = "police"
    POST_OFFICE = "post_office"
    PRIMARY_SCHOOL = "primary_school"
    REAL_ESTATE_AGENCY = "real_estate_agency"
    RESTAURANT = "restaurant"
    ROOFING_CONTRACTOR = "roofing_contractor"
    RV_PARK = "rv_park"
    SCHOOL = "school"
    SECONDARY_SCHOOL = "secondary_school"
    SHOE_STORE = "shoe_store"
    SHOPPING_MALL = "shopping_mall"
    SPA = "spa"
    STADIUM = "stadium"
    STORAGE = "storage"
    STORE = "store"
    SUBWAY_STATION = "subway_station"
    SUPERMARKET = "supermarket"
    SYNAGOGUE = "synagogue"
    TAXI_STAND = "taxi_stand"
    TOURIST_ATTRACTION = "tourist_attraction"
    TRAIN_STATION = "train_station"
    TRANSIT_STATION = "transit_station"
    TRAVEL_AGENCY = "travel_agency"
    UNIVERSITY = "university"
    VETERINARY_CARE = "veterinary_care"
    ZOO = "zoo"
    ADMINISTRATIVE_AREA_LEVEL_1 = "administrative_area_level_1"
    ADMINISTRATIVE_AREA_LEVEL_2 = "administrative_area_level_2"
    ADMINISTRATIVE_AREA_LEVEL_3 = "administrative_area_level_3"
    ADMINISTRATIVE_AREA_LEVEL_4 = "administrative_area_level_4"
    ADMINISTRATIVE_AREA_LEVEL_5 = "administrative_area_level_5"
    ARCHIPELAGO = "archipelago"
    COLLOQUIAL_AREA = "colloquial_area"
    CONTINENT = "continent"
    COUNTRY = "country"
    ESTABLISHMENT = "establishment"
    FINANCE = "finance"
    FLOOR = "floor"
    FOOD = "food"
    GENERAL_CONTRACTOR = "general_contractor"
    GEOCODE = "geocode"
    HEALTH = "health"
    INTERSECTION = "intersection"
    LOCALITY = "locality"
    NATURAL_FEATURE = "natural_feature"
    NEIGHBORHOOD = "neighborhood"
    PLACE_OF_WORSHIP = "place_of_worship"
    POINT_OF_INTEREST = "point_of_interest"
    POLITICAL = "political"
    POST_BOX = "post_box"
    POSTAL_CODE = "postal_code"
    POSTAL_CODE_PREFIX = "postal_code_prefix"
    POSTAL_CODE_SUFFIX = "postal_code_suffix"
    POSTAL_TOWN = "postal_town"
    PREMISE = "premise"
    ROOM = "room"
    ROUTE = "route"
    STREET_ADDRESS = "street_address"
    STREET_NUMBER = "street_number"
    SUBLOCALITY = "sublocality"
    SUBLOCALITY_LEVEL_1 = "sublocality_level_1"
    SUBLOCALITY_LEVEL_2 = "sublocality_level_2"
    SUBLOCALITY_LEVEL_3 = "sublocality_level_3"
    SUBLOCALITY_LEVEL_4 = "sublocality_level_4"
    SUBLOCALITY_LEVEL_5 = "sublocality_level_5"
    SUBPREMISE = "subpremise"
    TOWN_SQUARE = "town_square"


API_GROUPS: Final[EnumTable[Api]] = EnumTable(Api)
STATUSES: Final[EnumTable[Status]] = EnumTable(Status)
ELEMENT_STATUSES: Final[EnumTable[ElementStatus]] = EnumTable(ElementStatus)
# Responses spell travel modes in upper case ("DRIVING")
TRAVEL_MODES: Final[EnumTable[TravelMode]] = EnumTable(TravelMode, caseInsensitive=True)
UNIT_SYSTEMS: Final[EnumTable[UnitSystem]] = EnumTable(UnitSystem, caseInsensitive=True)
AVOIDS: Final[EnumTable[Avoid]] = EnumTable(Avoid)
TRAFFIC_MODELS: Final[EnumTable[TrafficModel]] = EnumTable(TrafficModel)
TRANSIT_MODES: Final[EnumTable[TransitMode]] = EnumTable(TransitMode, caseInsensitive=True)
TRANSIT_ROUTE_PREFERENCES: Final[EnumTable[TransitRoutePreference]] = EnumTable(TransitRoutePreference)
LOCATION_TYPES: Final[EnumTable[LocationType]] = EnumTable(LocationType)
RANK_BYS: Final[EnumTable[RankBy]] = EnumTable(RankBy)
LANGUAGES: Final[EnumTable[Language]] = EnumTable(
    Language,
    aliases={
        # Current ISO 639-1 code for Hebrew, the API answers with "iw"
        "he": Language.IW,
    },
)
PLACE_TYPES: Final[EnumTable[PlaceType]] = EnumTable(PlaceType)
