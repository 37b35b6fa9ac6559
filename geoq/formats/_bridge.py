"""Geometry bridge: per-format decode and encode routines.

This is the only place format-specific parsing lives. Decoders turn raw
entity text into canonical shapely geometries (``(lon, lat)`` order);
``to_format`` turns a geometry back into text and knows nothing about
the entity it came from.

WKT and GeoJSON grammar handling is delegated to shapely
(``shapely.wkt`` and ``shapely.geometry.shape`` / ``mapping``).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from shapely import wkt as shapely_wkt
from shapely.errors import ShapelyError
from shapely.geometry import Point, mapping, shape

from geoq.core.constants import MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE
from geoq.core.exceptions import (
    EntityParseError,
    InvalidCoordinateError,
    MissingGeometryError,
    UnsupportedGeometryError,
)
from geoq.formats import _geohash
from geoq.formats._constants import LATLON_PATTERN, FormatTag

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger("geoq.formats.bridge")

_GEOMETRY_ERRORS = (ShapelyError, ValueError, TypeError, KeyError, AttributeError, IndexError)

# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_latlon(text: str) -> Point:
    """Decode ``"lat,lon"`` into a Point at ``(lon, lat)``.

    Raises:
        EntityParseError: If the text is not a numeric pair.
        InvalidCoordinateError: If ``|lat| > 90`` or ``|lon| > 180``.
    """
    match = LATLON_PATTERN.match(text)
    if match is None:
        msg = f"Not a lat,lon pair: {text!r}"
        raise EntityParseError(msg, text=text)

    lat = float(match.group(1))
    lon = float(match.group(2))
    if not MIN_LATITUDE <= lat <= MAX_LATITUDE:
        msg = f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}] in {text!r}"
        raise InvalidCoordinateError(msg)
    if not MIN_LONGITUDE <= lon <= MAX_LONGITUDE:
        msg = (
            f"Longitude {lon} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}] in {text!r}"
        )
        raise InvalidCoordinateError(msg)
    return Point(lon, lat)


def bbox_of(geohash: str) -> BaseGeometry:
    """Geohash cell as a Polygon (covering use)."""
    return _geohash.bbox_polygon(geohash.strip())


def center_of(geohash: str) -> Point:
    """Geohash cell centre as a Point (point use)."""
    lat, lon = _geohash.center_of(geohash.strip())
    return Point(lon, lat)


def decode_wkt(text: str) -> BaseGeometry:
    """Parse Well-Known Text.

    Raises:
        EntityParseError: On a grammar failure, carrying the offending text.
    """
    try:
        return shapely_wkt.loads(text.strip())
    except _GEOMETRY_ERRORS as exc:
        msg = f"Invalid WKT {text!r}: {exc}"
        raise EntityParseError(msg, text=text) from exc


def _load_json(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError as exc:
        msg = f"Invalid JSON: {exc}"
        raise EntityParseError(msg, text=text) from exc
    if not isinstance(data, dict):
        msg = f"Expected a JSON object, got {type(data).__name__}"
        raise EntityParseError(msg, text=text)
    return data


def geometry_from_mapping(data: object, *, text: str = "") -> BaseGeometry:
    """Build a geometry from a GeoJSON geometry mapping.

    Raises:
        EntityParseError: If the mapping is not a valid GeoJSON geometry.
    """
    if not isinstance(data, dict):
        msg = f"GeoJSON geometry must be an object, got {type(data).__name__}"
        raise EntityParseError(msg, text=text)
    try:
        return shape(data)
    except _GEOMETRY_ERRORS as exc:
        msg = f"Invalid GeoJSON geometry: {exc}"
        raise EntityParseError(msg, text=text) from exc


def decode_geojson_geometry(text: str) -> BaseGeometry:
    """Decode a bare GeoJSON geometry object."""
    return geometry_from_mapping(_load_json(text), text=text)


def decode_geojson_feature(text: str) -> BaseGeometry:
    """Decode the ``geometry`` member of a GeoJSON Feature.

    Raises:
        MissingGeometryError: If ``geometry`` is absent or null.
    """
    data = _load_json(text)
    geometry = data.get("geometry")
    if geometry is None:
        msg = "GeoJSON Feature has no geometry"
        raise MissingGeometryError(msg)
    return geometry_from_mapping(geometry, text=text)


def decode_geojson_feature_collection(text: str) -> tuple[BaseGeometry, ...]:
    """Decode every non-null feature geometry of a FeatureCollection.

    Features with a null or absent geometry are skipped, not errored.
    """
    data = _load_json(text)
    features = data.get("features")
    if not isinstance(features, list):
        msg = "GeoJSON FeatureCollection has no features array"
        raise EntityParseError(msg, text=text)

    geometries: list[BaseGeometry] = []
    for idx, feature in enumerate(features):
        if not isinstance(feature, dict):
            msg = f"Feature {idx} is not an object"
            raise EntityParseError(msg, text=text)
        geometry = feature.get("geometry")
        if geometry is None:
            logger.debug("Skipping feature %d with null geometry", idx)
            continue
        geometries.append(geometry_from_mapping(geometry, text=text))
    return tuple(geometries)


def _single(decoder: Callable[[str], BaseGeometry]) -> Callable[[str], tuple[BaseGeometry, ...]]:
    return lambda text: (decoder(text),)


def _unrecognized(text: str) -> tuple[BaseGeometry, ...]:
    msg = f"Unrecognized entity: {text!r}"
    raise EntityParseError(msg, text=text, code="ENTITY_UNRECOGNIZED")


_DECODERS: dict[FormatTag, Callable[[str], tuple[BaseGeometry, ...]]] = {
    FormatTag.LATLON: _single(decode_latlon),
    FormatTag.GEOHASH: _single(bbox_of),
    FormatTag.WKT: _single(decode_wkt),
    FormatTag.GEOJSON_GEOMETRY: _single(decode_geojson_geometry),
    FormatTag.GEOJSON_FEATURE: _single(decode_geojson_feature),
    FormatTag.GEOJSON_FEATURE_COLLECTION: decode_geojson_feature_collection,
    FormatTag.UNRECOGNIZED: _unrecognized,
}


def decode(text: str, kind: FormatTag) -> tuple[BaseGeometry, ...]:
    """Decode ``text`` of format ``kind`` into its canonical geometries.

    Every kind yields exactly one geometry except a FeatureCollection,
    which yields one per feature with a non-null geometry.

    Raises:
        ConversionError: Any of its subclasses, depending on the format.
    """
    return _DECODERS[kind](text)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _dumps(data: object) -> str:
    return json.dumps(data, separators=(",", ":"))


def _require_point(geom: BaseGeometry, target: FormatTag) -> Point:
    if geom.geom_type != "Point" or geom.is_empty:
        msg = f"Cannot encode {geom.geom_type} as {target.value}; only points are supported"
        raise UnsupportedGeometryError(msg)
    return geom  # type: ignore[return-value]


def feature_dict(
    geom: BaseGeometry | None,
    properties: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """GeoJSON Feature mapping wrapping ``geom``."""
    return {
        "type": "Feature",
        "geometry": mapping(geom) if geom is not None else None,
        "properties": dict(properties) if properties else {},
    }


def feature_collection(geometries: Iterable[BaseGeometry]) -> str:
    """FeatureCollection text with one Feature per geometry."""
    return _dumps(
        {
            "type": "FeatureCollection",
            "features": [feature_dict(geom) for geom in geometries],
        }
    )


def to_format(geom: BaseGeometry, target: FormatTag, *, precision: int = 12) -> str:
    """Serialise ``geom`` in the ``target`` format.

    Args:
        geom: Canonical geometry.
        target: Output format.
        precision: Geohash characters, only used for ``FormatTag.GEOHASH``.

    Raises:
        UnsupportedGeometryError: If ``target`` only represents points
            and ``geom`` is not one, or ``target`` is ``UNRECOGNIZED``.
    """
    if target is FormatTag.LATLON:
        point = _require_point(geom, target)
        return f"{point.y!r},{point.x!r}"
    if target is FormatTag.GEOHASH:
        point = _require_point(geom, target)
        return _geohash.encode(point.y, point.x, precision)
    if target is FormatTag.WKT:
        return geom.wkt
    if target is FormatTag.GEOJSON_GEOMETRY:
        return _dumps(mapping(geom))
    if target is FormatTag.GEOJSON_FEATURE:
        return _dumps(feature_dict(geom))
    if target is FormatTag.GEOJSON_FEATURE_COLLECTION:
        return feature_collection([geom])

    msg = f"Cannot encode geometry as {target.value}"
    raise UnsupportedGeometryError(msg)

