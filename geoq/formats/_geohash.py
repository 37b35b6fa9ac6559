"""Geohash boundary.

Bit interleaving and base 32 encoding are delegated to ``pygeohash``;
everything here is derived from its ``encode`` / ``decode_exactly``
primitives: cell bounds, centres, neighbours, children, coverings and
the 64-bit integer representation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pygeohash
from shapely.geometry import box

from geoq.core.constants import (
    MAX_GEOHASH_LEVEL,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_GEOHASH_LEVEL,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from geoq.core.exceptions import ConfigurationError, EntityParseError, InvalidCoordinateError
from geoq.formats._constants import GEOHASH_ALPHABET, GEOHASH_PATTERN

if TYPE_CHECKING:
    from shapely.geometry import Polygon
    from shapely.geometry.base import BaseGeometry

ROOTS: tuple[str, ...] = tuple(GEOHASH_ALPHABET)
"""The 32 single-character root cells."""

# (d_lat, d_lon) in cell units, clockwise from north
_DIRECTIONS: dict[str, tuple[int, int]] = {
    "n": (1, 0),
    "ne": (1, 1),
    "e": (0, 1),
    "se": (-1, 1),
    "s": (-1, 0),
    "sw": (-1, -1),
    "w": (0, -1),
    "nw": (1, -1),
}

_GRID_ROWS = (("nw", "n", "ne"), ("w", None, "e"), ("sw", "s", "se"))

_LEVEL_MASK = 0xF
_CHAR_MASK = 0x1F
_BITS_PER_CHAR = 5


def validate_level(level: int) -> int:
    """Return ``level`` if it is a usable geohash precision.

    Raises:
        ConfigurationError: If ``level`` is outside 1-12.
    """
    if not MIN_GEOHASH_LEVEL <= level <= MAX_GEOHASH_LEVEL:
        msg = (
            f"Geohash level {level} is outside allowed range "
            f"[{MIN_GEOHASH_LEVEL}, {MAX_GEOHASH_LEVEL}]"
        )
        raise ConfigurationError(msg, code="GEOHASH_LEVEL_INVALID")
    return level


def _validate_hash(geohash: str) -> str:
    if not GEOHASH_PATTERN.match(geohash):
        msg = f"Not a base 32 geohash: {geohash!r}"
        raise EntityParseError(msg, text=geohash)
    return geohash


def encode(lat: float, lon: float, precision: int) -> str:
    """Geohash of the cell at ``precision`` containing ``(lat, lon)``.

    Raises:
        InvalidCoordinateError: If the coordinate is outside WGS 84 bounds.
        ConfigurationError: If ``precision`` is outside 1-12.
    """
    validate_level(precision)
    if not MIN_LATITUDE <= lat <= MAX_LATITUDE:
        msg = f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}]"
        raise InvalidCoordinateError(msg)
    if not MIN_LONGITUDE <= lon <= MAX_LONGITUDE:
        msg = f"Longitude {lon} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}]"
        raise InvalidCoordinateError(msg)
    return pygeohash.encode(lat, lon, precision=precision)


def _decode(geohash: str) -> tuple[float, float, float, float]:
    lat, lon, lat_err, lon_err = pygeohash.decode_exactly(_validate_hash(geohash))
    return float(lat), float(lon), float(lat_err), float(lon_err)


def bbox_of(geohash: str) -> tuple[float, float, float, float]:
    """Cell bounds as ``(min_lon, min_lat, max_lon, max_lat)``."""
    lat, lon, lat_err, lon_err = _decode(geohash)
    return (lon - lon_err, lat - lat_err, lon + lon_err, lat + lat_err)


def bbox_polygon(geohash: str) -> Polygon:
    """Cell bounds as a Polygon (the "covering" use of a geohash)."""
    return box(*bbox_of(geohash))


def center_of(geohash: str) -> tuple[float, float]:
    """Cell centre as ``(lat, lon)`` (the "point" use of a geohash)."""
    lat, lon, _lat_err, _lon_err = _decode(geohash)
    return (lat, lon)


def neighbors(geohash: str) -> dict[str, str]:
    """Adjacent cells keyed by compass direction (``n``, ``ne`` ... ``nw``).

    Longitude wraps at the antimeridian. Cells that would lie beyond a
    pole do not exist and are omitted.
    """
    lat, lon, lat_err, lon_err = _decode(geohash)
    height = 2 * lat_err
    width = 2 * lon_err
    result: dict[str, str] = {}
    for direction, (d_lat, d_lon) in _DIRECTIONS.items():
        n_lat = lat + d_lat * height
        if not MIN_LATITUDE < n_lat < MAX_LATITUDE:
            continue
        n_lon = lon + d_lon * width
        if n_lon > MAX_LONGITUDE:
            n_lon -= 360.0
        elif n_lon < MIN_LONGITUDE:
            n_lon += 360.0
        result[direction] = pygeohash.encode(n_lat, n_lon, precision=len(geohash))
    return result


def grid(geohash: str, *, include_self: bool = True) -> list[str]:
    """The 3x3 block around ``geohash``, rows north to south, west to east."""
    adjacent = neighbors(geohash)
    cells: list[str] = []
    for row in _GRID_ROWS:
        for direction in row:
            if direction is None:
                if include_self:
                    cells.append(geohash)
            elif direction in adjacent:
                cells.append(adjacent[direction])
    return cells


def children(geohash: str) -> list[str]:
    """The 32 cells one level below ``geohash``."""
    _validate_hash(geohash)
    if len(geohash) >= MAX_GEOHASH_LEVEL:
        msg = f"Geohash {geohash!r} is already at maximum precision {MAX_GEOHASH_LEVEL}"
        raise EntityParseError(msg, text=geohash)
    return [geohash + char for char in GEOHASH_ALPHABET]


def decode_long(value: int) -> str:
    """Base 32 geohash for a 64-bit integer geohash.

    The low 4 bits hold the precision; the ``5 * precision`` bits above
    them hold the hash, most significant character first.

    Raises:
        EntityParseError: If the value is negative, wider than 64 bits,
            or encodes a precision outside 1-12.
    """
    if value < 0 or value >= 1 << 64:
        msg = f"Integer geohash {value} is not an unsigned 64-bit value"
        raise EntityParseError(msg, text=str(value))
    level = value & _LEVEL_MASK
    if not MIN_GEOHASH_LEVEL <= level <= MAX_GEOHASH_LEVEL:
        msg = f"Integer geohash {value} encodes invalid precision {level}"
        raise EntityParseError(msg, text=str(value))

    bits = value >> 4
    chars: list[str] = []
    for _ in range(level):
        chars.append(GEOHASH_ALPHABET[bits & _CHAR_MASK])
        bits >>= _BITS_PER_CHAR
    return "".join(reversed(chars))


def covering(geom: BaseGeometry, level: int) -> list[str]:
    """Cells at ``level`` whose bounds intersect ``geom``.

    Walks the cell grid over the geometry's bbox row by row from the
    south-west corner.
    """
    validate_level(level)
    if geom.is_empty:
        return []

    min_lon, min_lat, max_lon, max_lat = geom.bounds
    origin = encode(min_lat, min_lon, level)
    lat0, lon0, lat_err, lon_err = _decode(origin)
    height = 2 * lat_err
    width = 2 * lon_err

    cells: list[str] = []
    lat = lat0
    while lat - lat_err <= max_lat and lat < MAX_LATITUDE:
        lon = lon0
        while lon - lon_err <= max_lon and lon < MAX_LONGITUDE:
            cell = pygeohash.encode(lat, lon, precision=level)
            if bbox_polygon(cell).intersects(geom):
                cells.append(cell)
            lon += width
        lat += height
    return cells
