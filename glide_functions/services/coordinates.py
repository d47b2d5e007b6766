# -----------------------------------------------------------------------------
# glide_functions/services/coordinates.py — Parse and format lat/lng values
# -----------------------------------------------------------------------------
# Locations arrive as JSON text, "lat,lng" text or an object with lat/lng
# fields. Parsers are tried in that order; a parser that fails hands over to
# the next one.
# -----------------------------------------------------------------------------

import json
import re
from decimal import Decimal
from typing import Any, Callable
from urllib.parse import quote

from glide_functions.core.errors import FunctionError, InvalidCoordinatesError

LAT_KEYS = ("lat", "latitude")
LNG_KEYS = ("lng", "lon", "long", "longitude")
DEFAULT_FORMAT = "lat,lng"
MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="

_DELIMITER = re.compile(r"\s*[,;]\s*|\s+")
_FORMAT_ALIASES = {
    "lat,lon": "lat,lng",
    "latlng": "lat,lng",
    "lon,lat": "lng,lat",
    "lnglat": "lng,lat",
    "lon": "lng",
    "latitude": "lat",
    "longitude": "lng",
}

Coordinates = tuple[float, float]


def _pick(source: Any, keys: tuple[str, ...]) -> Any:
    for key in keys:
        if isinstance(source, dict):
            if key in source and source[key] is not None:
                return source[key]
        elif getattr(source, key, None) is not None:
            return getattr(source, key)
    raise KeyError(keys[0])


def _from_fields(value: Any) -> Coordinates | None:
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            return None
        return float(value[0]), float(value[1])
    if value is None or isinstance(value, (str, int, float)):
        return None
    return float(_pick(value, LAT_KEYS)), float(_pick(value, LNG_KEYS))


def _from_json(value: Any) -> Coordinates | None:
    if not isinstance(value, str):
        return None
    return _from_fields(json.loads(value))


def _from_delimited(value: Any) -> Coordinates | None:
    if not isinstance(value, str):
        return None
    parts = [p for p in _DELIMITER.split(value.strip()) if p]
    if len(parts) != 2:
        return None
    return float(parts[0]), float(parts[1])


PARSERS: tuple[Callable[[Any], Coordinates | None], ...] = (
    _from_json,
    _from_delimited,
    _from_fields,
)


def parse_coordinates(value: Any) -> Coordinates:
    for parser in PARSERS:
        try:
            parsed = parser(value)
        except (ValueError, TypeError, KeyError):
            continue
        if parsed is None:
            continue
        lat, lng = parsed
        if -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0:
            return lat, lng
    raise InvalidCoordinatesError("Invalid coordinates")


def format_number(number: float) -> str:
    number = float(number)
    if number.is_integer():
        return str(int(number))
    text = repr(number)
    if "e" in text or "E" in text:
        # shortest round-trip digits, written out without an exponent
        text = format(Decimal(text), "f").rstrip("0").rstrip(".")
    return text


def format_coordinates(
    lat: float,
    lng: float,
    fmt: str = DEFAULT_FORMAT,
    precision: int | None = None,
) -> str:
    key = re.sub(r"\s+", "", (fmt or DEFAULT_FORMAT).lower())
    key = _FORMAT_ALIASES.get(key, key)
    lat, lng = float(lat), float(lng)
    if precision is not None:
        lat, lng = round(lat, precision), round(lng, precision)
    lat_text = format_number(lat)
    lng_text = format_number(lng)

    if key == "lat,lng":
        return f"{lat_text},{lng_text}"
    if key == "lng,lat":
        return f"{lng_text},{lat_text}"
    if key == "lat":
        return lat_text
    if key == "lng":
        return lng_text
    if key == "json":
        return json.dumps({"lat": lat, "lng": lng, "latitude": lat, "longitude": lng})
    if key == "geojson":
        return json.dumps({"type": "Point", "coordinates": [lng, lat]})
    if key == "url":
        return MAPS_SEARCH_URL + quote(f"{lat_text},{lng_text}")
    raise FunctionError(f"Unknown format '{fmt}'")


def format_location(value: Any, fmt: str = DEFAULT_FORMAT, precision: int | None = None) -> str:
    lat, lng = parse_coordinates(value)
    return format_coordinates(lat, lng, fmt, precision)
