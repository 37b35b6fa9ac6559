"""Best-guess conversion of geo-oriented JSON into GeoJSON Features.

Heuristics, first match wins:

1. GeoJSON already: Features pass through, bare geometries are wrapped,
   FeatureCollections are split into their Features.
2. A latitude member (``lat``, ``latitude``) plus a longitude member
   (``lon``, ``lng``, ``long``, ``longitude``) become a Point.
3. A geometry member (``geometry``, ``geom``, ``wkt``, ``geojson``) holding
   either a GeoJSON mapping or any entity text geoq can read.
4. A ``geohash`` member becomes the cell polygon.

Members not used to build the geometry become Feature properties.
Key matching is case-insensitive.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from shapely.geometry import Point

from geoq.commands._common import for_each
from geoq.core.constants import MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE
from geoq.core.exceptions import InvalidCoordinateError, MungeError
from geoq.formats import bbox_of, feature_dict, geometry_from_mapping
from geoq.formats._constants import GEOJSON_GEOMETRY_TYPES
from geoq.models.entity import Entity

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

_LAT_KEYS = ("lat", "latitude")
_LON_KEYS = ("lon", "lng", "long", "longitude")
_GEOMETRY_KEYS = ("geometry", "geom", "wkt", "geojson")
_GEOHASH_KEYS = ("geohash",)


def _find_key(data: dict[str, Any], candidates: tuple[str, ...]) -> str | None:
    by_lower = {str(key).lower(): key for key in data}
    for candidate in candidates:
        if candidate in by_lower:
            return by_lower[candidate]
    return None


def _coordinate(value: object, key: str) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        msg = f"Member {key!r} is not numeric: {value!r}"
        raise MungeError(msg) from exc


def _point_from(data: dict[str, Any], lat_key: str, lon_key: str) -> Point:
    lat = _coordinate(data[lat_key], lat_key)
    lon = _coordinate(data[lon_key], lon_key)
    if not MIN_LATITUDE <= lat <= MAX_LATITUDE:
        msg = f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}]"
        raise InvalidCoordinateError(msg)
    if not MIN_LONGITUDE <= lon <= MAX_LONGITUDE:
        msg = f"Longitude {lon} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}]"
        raise InvalidCoordinateError(msg)
    return Point(lon, lat)


def _geometry_from_member(value: object, key: str) -> BaseGeometry:
    if isinstance(value, dict):
        return geometry_from_mapping(value)
    if isinstance(value, str):
        return Entity.classify(value).to_geometry()
    msg = f"Member {key!r} holds neither GeoJSON nor entity text: {value!r}"
    raise MungeError(msg)


def _properties(data: dict[str, Any], used: Iterable[str]) -> dict[str, Any]:
    skip = set(used)
    return {key: value for key, value in data.items() if key not in skip}


def munge(text: str) -> list[dict[str, Any]]:
    """GeoJSON Feature mappings for one line of arbitrary JSON.

    Raises:
        MungeError: If the text is not a JSON object or holds nothing
            recognisable as a geometry.
        ConversionError: If a recognised member holds an invalid geometry.
    """
    try:
        data = json.loads(text)
    except ValueError as exc:
        msg = f"Invalid JSON: {exc}"
        raise MungeError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Expected a JSON object, got {type(data).__name__}"
        raise MungeError(msg)

    geojson_type = data.get("type")
    if geojson_type == "Feature":
        return [data]
    if geojson_type == "FeatureCollection" and isinstance(data.get("features"), list):
        return [feature for feature in data["features"] if isinstance(feature, dict)]
    if isinstance(geojson_type, str) and geojson_type in GEOJSON_GEOMETRY_TYPES:
        return [feature_dict(geometry_from_mapping(data))]

    lat_key = _find_key(data, _LAT_KEYS)
    lon_key = _find_key(data, _LON_KEYS)
    if lat_key is not None and lon_key is not None:
        point = _point_from(data, lat_key, lon_key)
        return [feature_dict(point, _properties(data, (lat_key, lon_key)))]

    geometry_key = _find_key(data, _GEOMETRY_KEYS)
    if geometry_key is not None:
        geom = _geometry_from_member(data[geometry_key], geometry_key)
        return [feature_dict(geom, _properties(data, (geometry_key,)))]

    geohash_key = _find_key(data, _GEOHASH_KEYS)
    if geohash_key is not None and isinstance(data[geohash_key], str):
        geom = bbox_of(data[geohash_key])
        return [feature_dict(geom, _properties(data, (geohash_key,)))]

    msg = "No geometry found (looked for GeoJSON, lat/lon, geometry/wkt and geohash members)"
    raise MungeError(msg)


def run(entities: Iterable[Entity], *, strict: bool = False) -> Iterator[str]:
    """Munge each input line into one or more Feature lines."""

    def handle(entity: Entity) -> list[str]:
        return [json.dumps(feature, separators=(",", ":")) for feature in munge(entity.raw)]

    return for_each(entities, handle, strict=strict)

