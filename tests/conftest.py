"""Shared pytest fixtures for the geoq test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from click.testing import CliRunner

from geoq.models.entity import Entity
from geoq.pipeline import EntityStream

# ---------------------------------------------------------------------------
# Sample entities
# ---------------------------------------------------------------------------

SQUARE_WKT = "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0))"
"""10 x 10 degree square with its south-west corner on Null Island."""

STATUE_OF_LIBERTY = "40.6892,-74.0445"

FEATURE_COLLECTION = (
    '{"type":"FeatureCollection","features":['
    '{"type":"Feature","geometry":{"type":"Point","coordinates":[1,2]},"properties":{}},'
    '{"type":"Feature","geometry":null,"properties":{"name":"nowhere"}},'
    '{"type":"Feature","geometry":{"type":"Point","coordinates":[3,4]},"properties":{}}'
    "]}"
)
"""Three features, the middle one without a geometry."""


@pytest.fixture()
def square_wkt() -> str:
    """WKT of the 10 x 10 degree test square."""
    return SQUARE_WKT


@pytest.fixture()
def feature_collection_text() -> str:
    """FeatureCollection text with one null-geometry feature."""
    return FEATURE_COLLECTION


@pytest.fixture()
def make_entities() -> Callable[..., list[Entity]]:
    """Build entities from text lines the same way STDIN is read."""

    def _make(*lines: str) -> list[Entity]:
        return list(EntityStream.from_lines(lines))

    return _make


# ---------------------------------------------------------------------------
# CLI fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def runner() -> CliRunner:
    """Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_geoq_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test with default configuration."""
    for key in (
        "GEOQ_LOG_LEVEL",
        "GEOQ_STRICT",
        "GEOQ_MAP_URL",
        "GEOQ_WHEREAMI_URL",
        "GEOQ_HTTP_TIMEOUT_S",
        "GEOQ_MAX_SIMPLIFY_ITERATIONS",
    ):
        monkeypatch.delenv(key, raising=False)
