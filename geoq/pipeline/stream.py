"""Lazy, single-pass stream of entities read from text input."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from geoq.models.entity import Entity

logger = logging.getLogger("geoq.pipeline.stream")


class EntityStream:
    """Forward-only iterator of Entities, one per non-blank input line.

    Lines are read one at a time as the consumer pulls. Classification
    never fails, so a malformed line is still emitted; its conversion
    error surfaces only if a consumer asks for its geometry.

    Once exhausted the stream stays exhausted.
    """

    def __init__(self, source: Iterable[str]) -> None:
        self._lines = iter(source)
        self._line_number = 0
        self._exhausted = False

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> EntityStream:
        """Stream over any iterable of strings (e.g. a list in tests)."""
        return cls(lines)

    @property
    def line_number(self) -> int:
        """Number of source lines consumed so far, blank lines included."""
        return self._line_number

    def __iter__(self) -> Iterator[Entity]:
        return self

    def __next__(self) -> Entity:
        if self._exhausted:
            raise StopIteration
        for line in self._lines:
            self._line_number += 1
            raw = line.rstrip("\r\n")
            if not raw.strip():
                continue
            entity = Entity.classify(raw, self._line_number)
            logger.debug("Line %d classified as %s", self._line_number, entity.kind.value)
            return entity
        self._exhausted = True
        raise StopIteration
