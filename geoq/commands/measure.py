"""Measurement commands: ``measure distance``, ``measure coord-count``, ``centroid``, ``bbox``."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from geoq.commands._common import collect_geometries, for_each
from geoq.core import geometry
from geoq.core.exceptions import ConversionError, QueryError
from geoq.formats import FormatTag, feature_dict, to_format

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

    from geoq.models.entity import Entity


def distance(
    entities: Iterable[Entity],
    query: Entity,
    *,
    strict: bool = False,
) -> Iterator[str]:
    """Geodesic distance in metres from ``query`` to each entity.

    Raises:
        QueryError: If the query entity cannot be converted.
    """
    try:
        target = query.to_geometry()
    except ConversionError as exc:
        msg = f"Invalid query entity {query.raw!r}: {exc.message}"
        raise QueryError(msg) from exc

    return for_each(
        entities,
        lambda entity: [repr(geometry.distance(target, entity.to_geometry()))],
        strict=strict,
    )


def coord_count(
    entities: Iterable[Entity],
    *,
    as_geojson: bool = False,
    strict: bool = False,
) -> Iterator[str]:
    """Number of coordinates in each entity.

    With ``as_geojson`` each entity is written as a Feature carrying a
    ``coord_count`` property instead.
    """

    def handle(entity: Entity) -> list[str]:
        geom = entity.to_geometry()
        count = geometry.coord_count(geom)
        if as_geojson:
            return [json.dumps(feature_dict(geom, {"coord_count": count}), separators=(",", ":"))]
        return [str(count)]

    return for_each(entities, handle, strict=strict)


def centroid(entities: Iterable[Entity], *, strict: bool = False) -> Iterator[str]:
    """Centroid of each entity as ``lat,lon``."""
    return for_each(
        entities,
        lambda entity: [
            to_format(geometry.centroid(entity.to_geometry()), FormatTag.LATLON),
        ],
        strict=strict,
    )


def _embedded(geom: BaseGeometry, bounds: geometry.Bbox) -> str:
    feature = feature_dict(geom)
    feature["bbox"] = list(bounds)
    return json.dumps(feature, separators=(",", ":"))


def bbox(
    entities: Iterable[Entity],
    *,
    embed: bool = False,
    combine: bool = False,
    strict: bool = False,
) -> Iterator[str]:
    """Bounding boxes of the input geometries.

    Args:
        entities: Input stream.
        embed: Write GeoJSON Features with a ``bbox`` member instead of
            bbox polygons as WKT.
        combine: One bbox for all inputs rather than one per entity. With
            ``embed`` the result is a FeatureCollection carrying the
            combined ``bbox``.
        strict: Treat the first conversion failure as fatal.
    """
    if combine:
        yield from _combined_bbox(entities, embed=embed, strict=strict)
        return

    def handle(entity: Entity) -> list[str]:
        geom = entity.to_geometry()
        bounds = geometry.bbox(geom)
        if embed:
            return [_embedded(geom, bounds)]
        return [to_format(geometry.bbox_polygon(bounds), FormatTag.WKT)]

    yield from for_each(entities, handle, strict=strict)


def _combined_bbox(entities: Iterable[Entity], *, embed: bool, strict: bool) -> Iterator[str]:
    geometries = [geom for geom in collect_geometries(entities, strict=strict) if not geom.is_empty]
    bounds = geometry.union_bbox(geometry.bbox(geom) for geom in geometries)
    if bounds is None:
        return
    if embed:
        collection = {
            "type": "FeatureCollection",
            "bbox": list(bounds),
            "features": [feature_dict(geom) for geom in geometries],
        }
        yield json.dumps(collection, separators=(",", ":"))
        return
    yield to_format(geometry.bbox_polygon(bounds), FormatTag.WKT)
