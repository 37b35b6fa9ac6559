"""Predicate filter: select stream entities by spatial relationship.

A stream entity passes when the predicate holds against *any* query
geometry; ``negate`` then inverts that result. Output is the entity's
original text, in input order, without deduplication.

Stream entities that fail to convert are logged and dropped; the run
continues.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

from geoq.core import geometry
from geoq.core.exceptions import ConversionError

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

    from geoq.models.entity import Entity
    from geoq.pipeline.query import QuerySet

logger = logging.getLogger("geoq.pipeline.filter")


class Predicate(enum.Enum):
    """Spatial relationship evaluated as ``predicate(query, candidate)``."""

    INTERSECTS = "intersects"
    CONTAINS = "contains"

    def evaluate(self, query: BaseGeometry, candidate: BaseGeometry) -> bool:
        return _EVALUATORS[self](query, candidate)


_EVALUATORS: dict[Predicate, Callable[[BaseGeometry, BaseGeometry], bool]] = {
    Predicate.INTERSECTS: geometry.intersects,
    Predicate.CONTAINS: geometry.contains,
}


def matches(
    candidate: BaseGeometry,
    query_set: QuerySet,
    predicate: Predicate,
    *,
    negate: bool = False,
) -> bool:
    """OR of ``predicate`` across every query geometry, optionally inverted."""
    result = any(predicate.evaluate(query, candidate) for query in query_set.geometries)
    return result != negate


def filter_entities(
    entities: Iterable[Entity],
    query_set: QuerySet,
    predicate: Predicate,
    *,
    negate: bool = False,
    on_error: Callable[[Entity, ConversionError], None] | None = None,
) -> Iterator[str]:
    """Lazily yield the raw text of every entity that passes the filter.

    Args:
        entities: Stream of candidate entities.
        query_set: Pre-converted query geometries (read-only).
        predicate: Relationship to test.
        negate: Invert the final match result.
        on_error: Called for each entity whose conversion fails, after
            it has been logged. May raise to abort the run.
    """
    for entity in entities:
        try:
            candidate = entity.to_geometry()
            passed = matches(candidate, query_set, predicate, negate=negate)
        except ConversionError as exc:
            logger.warning(
                "Skipping line %d (%s): %s",
                entity.line_number,
                exc.code,
                exc.message,
            )
            if on_error is not None:
                on_error(entity, exc)
            continue
        if passed:
            yield entity.raw
