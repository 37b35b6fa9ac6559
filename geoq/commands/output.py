"""Format conversion commands: ``wkt`` and ``gj {geom,f,fc}``.

Each entity is written once per geometry, so a FeatureCollection input
produces one output line per non-null feature.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from geoq.commands._common import collect_geometries, for_each
from geoq.formats import FormatTag, feature_collection, to_format

if TYPE_CHECKING:
    from geoq.models.entity import Entity


def convert(
    entities: Iterable[Entity],
    target: FormatTag,
    *,
    strict: bool = False,
) -> Iterator[str]:
    """Re-encode every geometry of every entity as ``target``."""
    return for_each(
        entities,
        lambda entity: [to_format(geom, target) for geom in entity.to_geometries()],
        strict=strict,
    )


def wkt(entities: Iterable[Entity], *, strict: bool = False) -> Iterator[str]:
    return convert(entities, FormatTag.WKT, strict=strict)


def geojson_geometry(entities: Iterable[Entity], *, strict: bool = False) -> Iterator[str]:
    return convert(entities, FormatTag.GEOJSON_GEOMETRY, strict=strict)


def geojson_feature(entities: Iterable[Entity], *, strict: bool = False) -> Iterator[str]:
    return convert(entities, FormatTag.GEOJSON_FEATURE, strict=strict)


def geojson_feature_collection(entities: Iterable[Entity], *, strict: bool = False) -> str:
    """All input geometries gathered into a single FeatureCollection."""
    return feature_collection(collect_geometries(entities, strict=strict))
