"""Geometry algorithm boundary.

Thin wrappers around shapely (predicates, simplification, centroid,
bounds) and pyproj (geodesic distance). geoq owns no geometric math of
its own; this module only fixes argument order, units and the error
raised when an operation is not defined for a geometry type.

All geometries are in WGS 84 with ``(lon, lat)`` coordinate order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import shapely
from shapely.errors import ShapelyError
from shapely.geometry import box
from shapely.ops import nearest_points

from geoq.core.exceptions import UnsupportedGeometryError, UnsupportedPredicateGeometryError

if TYPE_CHECKING:
    from shapely.geometry import Point
    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger("geoq.core.geometry")

POLYGONAL_TYPES = frozenset({"Polygon", "MultiPolygon"})

Bbox = tuple[float, float, float, float]

_MIN_TOLERANCE = 1e-9
_MAX_TOLERANCE = 360.0


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def intersects(a: BaseGeometry, b: BaseGeometry) -> bool:
    """True if ``a`` and ``b`` share at least one point (boundary or interior)."""
    return bool(a.intersects(b))


def contains(a: BaseGeometry, b: BaseGeometry) -> bool:
    """True if ``b`` lies entirely within the interior or boundary of ``a``.

    Raises:
        UnsupportedPredicateGeometryError: If ``a`` is not a Polygon or
            MultiPolygon.
    """
    require_polygonal(a)
    return bool(a.covers(b))


def require_polygonal(geom: BaseGeometry) -> None:
    """Raise unless ``geom`` can act as a container for ``contains``."""
    if geom.geom_type not in POLYGONAL_TYPES:
        msg = f"contains is only defined for Polygon or MultiPolygon, got {geom.geom_type}"
        raise UnsupportedPredicateGeometryError(msg)


# ---------------------------------------------------------------------------
# Measurement
# ---------------------------------------------------------------------------


def coord_count(geom: BaseGeometry) -> int:
    """Number of coordinates in the geometry (closing ring points included)."""
    return len(shapely.get_coordinates(geom))


def centroid(geom: BaseGeometry) -> Point:
    """Planar centroid of the geometry.

    Raises:
        UnsupportedGeometryError: If the geometry is empty.
    """
    if geom.is_empty:
        msg = f"Cannot compute centroid of empty {geom.geom_type}"
        raise UnsupportedGeometryError(msg)
    return geom.centroid


def bbox(geom: BaseGeometry) -> Bbox:
    """Return ``(min_lon, min_lat, max_lon, max_lat)``.

    Raises:
        UnsupportedGeometryError: If the geometry is empty.
    """
    if geom.is_empty:
        msg = f"Cannot compute bbox of empty {geom.geom_type}"
        raise UnsupportedGeometryError(msg)
    min_lon, min_lat, max_lon, max_lat = geom.bounds
    return (min_lon, min_lat, max_lon, max_lat)


def union_bbox(boxes: Iterable[Bbox]) -> Bbox | None:
    """Smallest bbox enclosing every bbox in ``boxes``; None if there are none."""
    result: Bbox | None = None
    for min_lon, min_lat, max_lon, max_lat in boxes:
        if result is None:
            result = (min_lon, min_lat, max_lon, max_lat)
            continue
        result = (
            min(result[0], min_lon),
            min(result[1], min_lat),
            max(result[2], max_lon),
            max(result[3], max_lat),
        )
    return result


def bbox_polygon(bounds: Bbox) -> BaseGeometry:
    """Polygon for a ``(min_lon, min_lat, max_lon, max_lat)`` bbox."""
    return box(*bounds)


def distance(a: BaseGeometry, b: BaseGeometry) -> float:
    """Geodesic distance in metres on the WGS 84 ellipsoid.

    For non-point geometries the distance is measured between the two
    nearest points (planar nearest, geodesic length). Returns ``0.0``
    when the geometries intersect.

    Raises:
        UnsupportedGeometryError: If either geometry is empty.
    """
    if a.is_empty or b.is_empty:
        msg = "Cannot measure distance to an empty geometry"
        raise UnsupportedGeometryError(msg)
    if a.intersects(b):
        return 0.0

    from pyproj import Geod

    near_a, near_b = nearest_points(a, b)
    geod = Geod(ellps="WGS84")
    _fwd, _back, metres = geod.inv(near_a.x, near_a.y, near_b.x, near_b.y)
    return abs(metres)


# ---------------------------------------------------------------------------
# Transformation
# ---------------------------------------------------------------------------


def simplify(geom: BaseGeometry, epsilon: float) -> BaseGeometry:
    """Douglas-Peucker simplification with tolerance ``epsilon`` (degrees)."""
    if epsilon < 0:
        msg = f"Simplification epsilon must be >= 0, got {epsilon}"
        raise UnsupportedGeometryError(msg)
    return geom.simplify(epsilon, preserve_topology=True)


def simplify_to_coord_count(
    geom: BaseGeometry,
    epsilon: float,
    max_coords: int,
    *,
    max_iterations: int = 64,
) -> BaseGeometry:
    """Simplify until the geometry has at most ``max_coords`` coordinates.

    Starts from ``epsilon`` and doubles it on every pass. Gives up once the
    tolerance spans the whole globe, returning the smallest result reached
    (a polygon cannot drop below its minimum ring size).
    """
    current = geom
    if coord_count(current) <= max_coords:
        return current

    tolerance = epsilon if epsilon > 0 else _MIN_TOLERANCE
    for _ in range(max_iterations):
        current = simplify(geom, tolerance)
        if coord_count(current) <= max_coords:
            return current
        if tolerance > _MAX_TOLERANCE:
            break
        tolerance *= 2

    logger.info(
        "Could not simplify %s below %d coordinates (reached %d)",
        geom.geom_type,
        max_coords,
        coord_count(current),
    )
    return current


def clip(geom: BaseGeometry, mask: BaseGeometry) -> BaseGeometry:
    """Part of ``geom`` that lies within ``mask``.

    Raises:
        UnsupportedGeometryError: If GEOS cannot intersect the inputs
            (typically an invalid polygon).
    """
    try:
        return geom.intersection(mask)
    except ShapelyError as exc:
        msg = f"Cannot clip {geom.geom_type}: {exc}"
        raise UnsupportedGeometryError(msg) from exc
