"""Data model for one classified input line.

An Entity keeps the original text untouched alongside its format tag,
and converts itself into canonical geometry only when asked. The result
of the first successful conversion is memoized for the lifetime of the
instance and never recomputed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from shapely.geometry import GeometryCollection

from geoq.formats import FormatTag, classify, decode

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry


@dataclass(slots=True, eq=False)
class Entity:
    """One input record in its original encoding.

    Attributes:
        raw: Original text, without its line terminator. Never mutated.
        kind: Format tag assigned when the line was read.
        line_number: One-based source line, ``0`` when not read from a stream.
    """

    raw: str
    kind: FormatTag
    line_number: int = 0
    _geometries: tuple[BaseGeometry, ...] | None = field(default=None, init=False, repr=False)

    @classmethod
    def classify(cls, raw: str, line_number: int = 0) -> Entity:
        """Build an Entity, tagging ``raw`` with its sniffed format."""
        return cls(raw=raw, kind=classify(raw), line_number=line_number)

    @property
    def is_converted(self) -> bool:
        """Whether a geometry has already been computed for this entity."""
        return self._geometries is not None

    def to_geometries(self) -> tuple[BaseGeometry, ...]:
        """All canonical geometries of this entity.

        One geometry for every format except a FeatureCollection, which
        yields one per feature with a non-null geometry.

        Raises:
            ConversionError: If the text cannot be converted. Failures
                are not memoized.
        """
        if self._geometries is None:
            self._geometries = decode(self.raw, self.kind)
        return self._geometries

    def to_geometry(self) -> BaseGeometry:
        """The single canonical geometry of this entity.

        A FeatureCollection converts to a GeometryCollection of its
        feature geometries; a geohash converts to its cell polygon.
        """
        geometries = self.to_geometries()
        if self.kind is FormatTag.GEOJSON_FEATURE_COLLECTION:
            return GeometryCollection(list(geometries))
        return geometries[0]
