"""Per-item error policy shared by the streaming commands."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

from geoq.core.exceptions import ConversionError

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

    from geoq.models.entity import Entity

logger = logging.getLogger("geoq.commands")


def report_skip(entity: Entity, exc: ConversionError) -> None:
    """Log a skipped stream item with its line number and error code."""
    logger.warning(
        "Skipping line %d (%s): %s",
        entity.line_number,
        exc.code,
        exc.message,
    )


def for_each(
    entities: Iterable[Entity],
    handler: Callable[[Entity], Iterable[str]],
    *,
    strict: bool = False,
) -> Iterator[str]:
    """Apply ``handler`` to each entity and yield its output lines.

    A ``ConversionError`` from one entity drops that entity's output and
    is logged; with ``strict`` it propagates and ends the run. Output of
    a failing entity is never partially emitted.
    """
    for entity in entities:
        try:
            lines = list(handler(entity))
        except ConversionError as exc:
            report_skip(entity, exc)
            if strict:
                raise
            continue
        yield from lines


def collect_geometries(
    entities: Iterable[Entity],
    *,
    strict: bool = False,
) -> Iterator[BaseGeometry]:
    """Every geometry of every entity, skipping entities that fail to convert."""
    for entity in entities:
        try:
            geometries = entity.to_geometries()
        except ConversionError as exc:
            report_skip(entity, exc)
            if strict:
                raise
            continue
        yield from geometries
