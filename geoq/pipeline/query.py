"""Query set: the fixed geometries a stream is filtered against.

Query entities come from a single command-line argument or a query file
with one entity per line. Each is converted to geometry exactly once,
up front. A query that cannot be converted is a user error and ends the
run, unlike a bad stream line, which is only skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from geoq.core.exceptions import ConfigurationError, ConversionError, QueryError
from geoq.core.geometry import POLYGONAL_TYPES
from geoq.pipeline.filter import Predicate
from geoq.pipeline.stream import EntityStream

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

    from geoq.models.entity import Entity

logger = logging.getLogger("geoq.pipeline.query")


@dataclass(frozen=True, slots=True)
class QueryEntry:
    """One query entity and one of its eagerly computed geometries."""

    entity: Entity
    geometry: BaseGeometry


@dataclass(frozen=True, slots=True)
class QuerySet:
    """Ordered, read-only sequence of query entries.

    A FeatureCollection query contributes one entry per feature geometry.
    """

    entries: tuple[QueryEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[QueryEntry]:
        return iter(self.entries)

    @property
    def geometries(self) -> tuple[BaseGeometry, ...]:
        return tuple(entry.geometry for entry in self.entries)

    @classmethod
    def from_entities(
        cls,
        entities: Iterable[Entity],
        *,
        predicate: Predicate | None = None,
    ) -> QuerySet:
        """Convert every query entity and validate the result.

        Raises:
            QueryError: If a query entity cannot be converted, or a
                ``contains`` query is not a Polygon / MultiPolygon.
            ConfigurationError: If there are no query geometries.
        """
        entries: list[QueryEntry] = []
        for entity in entities:
            try:
                geometries = entity.to_geometries()
            except ConversionError as exc:
                msg = f"Invalid query entity {entity.raw!r}: {exc.message}"
                raise QueryError(msg) from exc
            entries.extend(QueryEntry(entity, geom) for geom in geometries)

        if not entries:
            msg = "No query entities given; supply a QUERY argument or --query-file"
            raise ConfigurationError(msg, code="QUERY_EMPTY")

        if predicate is Predicate.CONTAINS:
            for entry in entries:
                if entry.geometry.geom_type not in POLYGONAL_TYPES:
                    msg = (
                        f"contains query must be a Polygon or MultiPolygon, "
                        f"got {entry.geometry.geom_type} from {entry.entity.raw!r}"
                    )
                    raise QueryError(msg, code="QUERY_NOT_POLYGONAL")

        logger.info("Loaded %d query geometr%s", len(entries), "y" if len(entries) == 1 else "ies")
        return cls(tuple(entries))

    @classmethod
    def build(
        cls,
        query: str | None = None,
        query_file: Path | str | None = None,
        *,
        predicate: Predicate | None = None,
    ) -> QuerySet:
        """Build a query set from exactly one of an argument or a file.

        Raises:
            ConfigurationError: If both or neither source is given, or
                the query file cannot be read.
            QueryError: See ``from_entities``.
        """
        if query is not None and query_file is not None:
            msg = "Give either a QUERY argument or --query-file, not both"
            raise ConfigurationError(msg, code="QUERY_SOURCE_AMBIGUOUS")

        if query_file is not None:
            path = Path(query_file)
            try:
                with path.open(encoding="utf-8") as handle:
                    return cls.from_entities(EntityStream(handle), predicate=predicate)
            except OSError as exc:
                msg = f"Cannot read query file {path}: {exc}"
                raise ConfigurationError(msg, code="QUERY_FILE_UNREADABLE") from exc

        lines = [query] if query is not None else []
        return cls.from_entities(EntityStream.from_lines(lines), predicate=predicate)
