"""Format sniffing: decide which encoding a line of text uses.

Classification is syntactic only. No geometry is built here, so a
stream can skip unreadable lines without paying conversion cost.

The checks run in a fixed order and the first match wins. The order is
a priority policy for ambiguous-looking text and must be kept.
"""

from __future__ import annotations

import json

from geoq.formats._constants import (
    GEOHASH_PATTERN,
    GEOJSON_FEATURE,
    GEOJSON_FEATURE_COLLECTION,
    GEOJSON_GEOMETRY_TYPES,
    LATLON_PATTERN,
    WKT_KEYWORDS,
    FormatTag,
)


def classify(line: str) -> FormatTag:
    """Return the format tag for one line of input. Never raises.

    Lat/lon magnitudes are not range-checked here; an out-of-range pair
    is still tagged ``LATLON`` and fails later, at conversion time.
    """
    text = line.strip()
    if not text:
        return FormatTag.UNRECOGNIZED

    for check in _CHECKS:
        tag = check(text)
        if tag is not None:
            return tag
    return FormatTag.UNRECOGNIZED


def _check_latlon(text: str) -> FormatTag | None:
    return FormatTag.LATLON if LATLON_PATTERN.match(text) else None


def _check_geohash(text: str) -> FormatTag | None:
    return FormatTag.GEOHASH if GEOHASH_PATTERN.match(text) else None


def _check_wkt(text: str) -> FormatTag | None:
    upper = text.upper()
    if any(upper.startswith(keyword) for keyword in WKT_KEYWORDS):
        return FormatTag.WKT
    return None


def _check_geojson(text: str) -> FormatTag | None:
    if not text.startswith("{"):
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    geojson_type = data.get("type")
    if not isinstance(geojson_type, str):
        return None
    if geojson_type in GEOJSON_GEOMETRY_TYPES:
        return FormatTag.GEOJSON_GEOMETRY
    if geojson_type == GEOJSON_FEATURE:
        return FormatTag.GEOJSON_FEATURE
    if geojson_type == GEOJSON_FEATURE_COLLECTION:
        return FormatTag.GEOJSON_FEATURE_COLLECTION
    return None


_CHECKS = (_check_latlon, _check_geohash, _check_wkt, _check_geojson)
