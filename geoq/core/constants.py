"""Shared geoq constants."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# WGS 84 coordinate bounds
# ---------------------------------------------------------------------------

MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

WGS84_CRS = "EPSG:4326"
"""CRS of every canonical geometry (coordinates are ``(lon, lat)``)."""

# ---------------------------------------------------------------------------
# Geohash precision
# ---------------------------------------------------------------------------

MIN_GEOHASH_LEVEL = 1
MAX_GEOHASH_LEVEL = 12

# ---------------------------------------------------------------------------
# Outer-surface defaults
# ---------------------------------------------------------------------------

DEFAULT_MAP_URL: str = "https://geojson.io/"
"""Mapping website that accepts an inline ``#data=`` GeoJSON payload."""

DEFAULT_WHEREAMI_URL: str = "https://ipinfo.io/json"
"""IP geolocation endpoint returning a ``loc`` member as ``"lat,lon"``."""

DEFAULT_HTTP_TIMEOUT_S = 10.0
DEFAULT_MAX_SIMPLIFY_ITERATIONS = 64
