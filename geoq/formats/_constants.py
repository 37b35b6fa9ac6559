"""Shared constants for entity formats."""

from __future__ import annotations

import enum
import re


class FormatTag(enum.Enum):
    """Textual encoding of one input line. Exactly one per entity."""

    LATLON = "latlon"
    GEOHASH = "geohash"
    WKT = "wkt"
    GEOJSON_GEOMETRY = "geojson_geometry"
    GEOJSON_FEATURE = "geojson_feature"
    GEOJSON_FEATURE_COLLECTION = "geojson_feature_collection"
    UNRECOGNIZED = "unrecognized"


# Signed decimal with optional fraction and exponent (``-122``, ``45.5``, ``.5``, ``1e-3``)
_NUMBER = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"

LATLON_PATTERN = re.compile(rf"^\s*({_NUMBER})\s*,\s*({_NUMBER})\s*$")

# Base 32 geohash alphabet (no a, i, l, o)
GEOHASH_ALPHABET = "0123456789bcdefghjkmnpqrstuvwxyz"
GEOHASH_PATTERN = re.compile(rf"^[{GEOHASH_ALPHABET}]{{1,12}}$")

WKT_KEYWORDS = (
    "POINT",
    "LINESTRING",
    "POLYGON",
    "MULTIPOINT",
    "MULTILINESTRING",
    "MULTIPOLYGON",
    "GEOMETRYCOLLECTION",
)

GEOJSON_GEOMETRY_TYPES = frozenset(
    {
        "Point",
        "LineString",
        "Polygon",
        "MultiPoint",
        "MultiLineString",
        "MultiPolygon",
        "GeometryCollection",
    }
)
GEOJSON_FEATURE = "Feature"
GEOJSON_FEATURE_COLLECTION = "FeatureCollection"
