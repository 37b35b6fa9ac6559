"""Entity formats: sniffing, decoding and encoding.

Supported encodings (one per input line):
- ``lat,lon`` numeric pairs
- base 32 geohashes (1-12 characters)
- Well-Known Text
- GeoJSON geometries, Features and FeatureCollections

The package is split into focused stages:
- **_sniffer**: cheap syntactic classification into a ``FormatTag``
- **_bridge**: per-format decode into shapely geometries and ``to_format``
- **_geohash**: geohash cell arithmetic on top of ``pygeohash``
"""

from __future__ import annotations

from geoq.formats import _geohash as geohash
from geoq.formats._bridge import (
    bbox_of,
    center_of,
    decode,
    decode_geojson_feature,
    decode_geojson_feature_collection,
    decode_geojson_geometry,
    decode_latlon,
    decode_wkt,
    feature_collection,
    feature_dict,
    geometry_from_mapping,
    to_format,
)
from geoq.formats._constants import GEOHASH_ALPHABET, WKT_KEYWORDS, FormatTag
from geoq.formats._sniffer import classify

__all__ = [
    "GEOHASH_ALPHABET",
    "WKT_KEYWORDS",
    "FormatTag",
    "bbox_of",
    "center_of",
    "classify",
    "decode",
    "decode_geojson_feature",
    "decode_geojson_feature_collection",
    "decode_geojson_geometry",
    "decode_latlon",
    "decode_wkt",
    "feature_collection",
    "feature_dict",
    "geohash",
    "geometry_from_mapping",
    "to_format",
]
