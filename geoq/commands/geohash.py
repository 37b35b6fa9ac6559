"""Geohash commands: ``gh {point,covering,children,roots,encode-long,neighbors}``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from geoq.commands._common import for_each
from geoq.core.exceptions import EntityParseError
from geoq.formats import FormatTag, geohash, to_format

if TYPE_CHECKING:
    from geoq.models.entity import Entity


def _require_geohash(entity: Entity) -> str:
    if entity.kind is not FormatTag.GEOHASH:
        msg = f"Expected a geohash, got {entity.kind.value} entity {entity.raw!r}"
        raise EntityParseError(msg, text=entity.raw)
    return entity.raw.strip()


def point(entities: Iterable[Entity], level: int, *, strict: bool = False) -> Iterator[str]:
    """Geohash at ``level`` for each point entity."""
    geohash.validate_level(level)
    return for_each(
        entities,
        lambda entity: [to_format(entity.to_geometry(), FormatTag.GEOHASH, precision=level)],
        strict=strict,
    )


def covering(
    entities: Iterable[Entity],
    level: int,
    *,
    original: bool = False,
    strict: bool = False,
) -> Iterator[str]:
    """Cells at ``level`` covering each entity, optionally preceded by the entity."""
    geohash.validate_level(level)

    def handle(entity: Entity) -> list[str]:
        cells = geohash.covering(entity.to_geometry(), level)
        return [entity.raw, *cells] if original else cells

    return for_each(entities, handle, strict=strict)


def children(entities: Iterable[Entity], *, strict: bool = False) -> Iterator[str]:
    """The 32 children of each geohash entity."""
    return for_each(
        entities,
        lambda entity: geohash.children(_require_geohash(entity)),
        strict=strict,
    )


def roots() -> list[str]:
    return list(geohash.ROOTS)


def encode_long(entities: Iterable[Entity], *, strict: bool = False) -> Iterator[str]:
    """Base 32 form of each base 10 integer geohash line."""

    def handle(entity: Entity) -> list[str]:
        text = entity.raw.strip()
        try:
            value = int(text)
        except ValueError as exc:
            msg = f"Not a base 10 integer geohash: {text!r}"
            raise EntityParseError(msg, text=text) from exc
        return [geohash.decode_long(value)]

    return for_each(entities, handle, strict=strict)


def neighbors(
    entities: Iterable[Entity],
    *,
    exclude: bool = False,
    strict: bool = False,
) -> Iterator[str]:
    """3x3 grid around each geohash, or only its neighbours with ``exclude``."""
    return for_each(
        entities,
        lambda entity: geohash.grid(_require_geohash(entity), include_self=not exclude),
        strict=strict,
    )
