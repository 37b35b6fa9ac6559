"""``map``: view all input entities on geojson.io."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING
from urllib.parse import quote

from geoq.formats import feature_collection

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry


def build_url(geometries: Iterable[BaseGeometry], base_url: str) -> str:
    """Mapping URL with every geometry inlined as a FeatureCollection."""
    payload = feature_collection(geometries)
    return f"{base_url.rstrip('/')}/#data=data:application/json,{quote(payload, safe='')}"
