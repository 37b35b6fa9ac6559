"""Geometry transformation commands: ``simplify`` and ``snip``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from geoq.commands._common import for_each
from geoq.core import geometry
from geoq.core.exceptions import ConfigurationError, ConversionError, QueryError
from geoq.formats import FormatTag, to_format

if TYPE_CHECKING:
    from geoq.models.entity import Entity


def simplify(
    entities: Iterable[Entity],
    epsilon: float,
    *,
    to_coord_count: int | None = None,
    max_iterations: int = 64,
    strict: bool = False,
) -> Iterator[str]:
    """Simplify each geometry and write it as a GeoJSON geometry.

    With ``to_coord_count``, ``epsilon`` is only the starting tolerance:
    it is doubled until the geometry has at most that many coordinates.

    Raises:
        ConfigurationError: If ``epsilon`` is negative or
            ``to_coord_count`` is not positive.
    """
    if epsilon < 0:
        msg = f"epsilon must be >= 0, got {epsilon}"
        raise ConfigurationError(msg, code="SIMPLIFY_EPSILON_INVALID")
    if to_coord_count is not None and to_coord_count < 1:
        msg = f"--to-coord-count must be >= 1, got {to_coord_count}"
        raise ConfigurationError(msg, code="SIMPLIFY_COORD_COUNT_INVALID")

    def handle(entity: Entity) -> list[str]:
        lines = []
        for geom in entity.to_geometries():
            if to_coord_count is None:
                simplified = geometry.simplify(geom, epsilon)
            else:
                simplified = geometry.simplify_to_coord_count(
                    geom,
                    epsilon,
                    to_coord_count,
                    max_iterations=max_iterations,
                )
            lines.append(to_format(simplified, FormatTag.GEOJSON_GEOMETRY))
        return lines

    return for_each(entities, handle, strict=strict)


def snip(entities: Iterable[Entity], query: Entity, *, strict: bool = False) -> Iterator[str]:
    """Clip each entity to the query geometry and write the result as WKT.

    Entities that do not overlap the query produce no output.

    Raises:
        QueryError: If the query entity cannot be converted.
    """
    try:
        mask = query.to_geometry()
    except ConversionError as exc:
        msg = f"Invalid query entity {query.raw!r}: {exc.message}"
        raise QueryError(msg) from exc

    def handle(entity: Entity) -> list[str]:
        clipped = geometry.clip(entity.to_geometry(), mask)
        if clipped.is_empty:
            return []
        return [to_format(clipped, FormatTag.WKT)]

    return for_each(entities, handle, strict=strict)
