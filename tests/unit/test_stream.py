"""Tests for the entity stream.

Covers:
- One entity per non-blank line, with source line numbers
- Malformed lines are still emitted
- Lazy, forward-only, sticky exhaustion
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from geoq.formats import FormatTag
from geoq.pipeline import EntityStream


class TestEntityStream:
    """Line handling."""

    def test_blank_lines_skipped(self) -> None:
        stream = EntityStream.from_lines(["45,-122\n", "\n", "   \n", "9q5\n"])
        entities = list(stream)
        assert [e.raw for e in entities] == ["45,-122", "9q5"]
        assert [e.line_number for e in entities] == [1, 4]
        assert stream.line_number == 4

    def test_malformed_line_still_emitted(self) -> None:
        entities = list(EntityStream.from_lines(["{not json", "1,1"]))
        assert [e.kind for e in entities] == [FormatTag.UNRECOGNIZED, FormatTag.LATLON]

    def test_crlf_stripped(self) -> None:
        (entity,) = EntityStream.from_lines(["POINT (1 2)\r\n"])
        assert entity.raw == "POINT (1 2)"
        assert entity.kind is FormatTag.WKT

    def test_empty_source(self) -> None:
        assert list(EntityStream.from_lines([])) == []


class TestLaziness:
    """Lines are read only when pulled."""

    def test_reads_one_line_at_a_time(self) -> None:
        def source() -> Iterator[str]:
            yield "1,1"
            msg = "read too far"
            raise RuntimeError(msg)

        stream = EntityStream(source())
        assert next(stream).raw == "1,1"

    def test_exhaustion_is_sticky(self) -> None:
        stream = EntityStream.from_lines(["1,1"])
        assert len(list(stream)) == 1
        with pytest.raises(StopIteration):
            next(stream)
        assert list(stream) == []
