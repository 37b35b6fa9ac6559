"""Tests for the geometry algorithm boundary."""

from __future__ import annotations

import pytest
from shapely.geometry import GeometryCollection, LineString, Point, box

from geoq.core import geometry
from geoq.core.exceptions import UnsupportedGeometryError, UnsupportedPredicateGeometryError

SQUARE = box(0, 0, 10, 10)


class TestPredicates:
    """intersects / contains."""

    def test_intersects_touching(self) -> None:
        assert geometry.intersects(SQUARE, Point(10, 10)) is True

    def test_intersects_disjoint(self) -> None:
        assert geometry.intersects(SQUARE, Point(11, 11)) is False

    def test_contains_interior(self) -> None:
        assert geometry.contains(SQUARE, Point(5, 5)) is True

    def test_contains_boundary(self) -> None:
        assert geometry.contains(SQUARE, LineString([(0, 0), (0, 10)])) is True

    def test_contains_partial_overlap(self) -> None:
        assert geometry.contains(SQUARE, LineString([(5, 5), (15, 5)])) is False

    def test_contains_non_polygonal(self) -> None:
        with pytest.raises(UnsupportedPredicateGeometryError):
            geometry.contains(LineString([(0, 0), (1, 1)]), Point(0, 0))


class TestMeasurement:
    """Counts, centroids, bounds and distance."""

    def test_coord_count_includes_closing_point(self) -> None:
        assert geometry.coord_count(SQUARE) == 5

    def test_coord_count_point(self) -> None:
        assert geometry.coord_count(Point(1, 2)) == 1

    def test_centroid(self) -> None:
        point = geometry.centroid(SQUARE)
        assert (point.x, point.y) == (5.0, 5.0)

    def test_centroid_empty(self) -> None:
        with pytest.raises(UnsupportedGeometryError):
            geometry.centroid(GeometryCollection())

    def test_bbox(self) -> None:
        assert geometry.bbox(LineString([(0, 0), (2, 3)])) == (0.0, 0.0, 2.0, 3.0)

    def test_bbox_empty(self) -> None:
        with pytest.raises(UnsupportedGeometryError):
            geometry.bbox(GeometryCollection())

    def test_union_bbox(self) -> None:
        boxes = [(0.0, 0.0, 1.0, 1.0), (-1.0, 0.5, 0.5, 2.0)]
        assert geometry.union_bbox(boxes) == (-1.0, 0.0, 1.0, 2.0)

    def test_union_bbox_empty(self) -> None:
        assert geometry.union_bbox([]) is None

    def test_distance_one_degree_latitude(self) -> None:
        assert geometry.distance(Point(0, 0), Point(0, 1)) == pytest.approx(110_574, rel=1e-3)

    def test_distance_symmetric(self) -> None:
        a, b = Point(-122.6, 45.5), Point(-74.0, 40.7)
        assert geometry.distance(a, b) == pytest.approx(geometry.distance(b, a))

    def test_distance_intersecting_is_zero(self) -> None:
        assert geometry.distance(SQUARE, Point(5, 5)) == 0.0

    def test_distance_to_polygon_uses_nearest_point(self) -> None:
        assert geometry.distance(SQUARE, Point(10, 11)) == pytest.approx(110_575, rel=1e-2)


class TestTransformation:
    """Simplification and clipping."""

    def test_simplify_zero_is_identity(self) -> None:
        line = LineString([(0, 0), (1, 0.5), (2, 0)])
        assert geometry.simplify(line, 0).equals(line)

    def test_simplify_removes_small_deviation(self) -> None:
        line = LineString([(0, 0), (1, 0.01), (2, 0)])
        assert geometry.coord_count(geometry.simplify(line, 0.1)) == 2

    def test_simplify_to_coord_count(self) -> None:
        line = LineString([(i, (i % 2) * 0.1) for i in range(20)])
        result = geometry.simplify_to_coord_count(line, 0.001, 2)
        assert geometry.coord_count(result) <= 2

    def test_simplify_to_coord_count_already_small(self) -> None:
        line = LineString([(0, 0), (1, 1)])
        assert geometry.simplify_to_coord_count(line, 0.1, 5) is line

    def test_simplify_to_coord_count_terminates_on_polygon(self) -> None:
        result = geometry.simplify_to_coord_count(SQUARE, 0.001, 2)
        assert result.geom_type == "Polygon"
        assert geometry.coord_count(result) >= 4

    def test_clip(self) -> None:
        clipped = geometry.clip(LineString([(-5, 5), (15, 5)]), SQUARE)
        assert clipped.length == pytest.approx(10.0)

    def test_clip_disjoint_is_empty(self) -> None:
        assert geometry.clip(Point(20, 20), SQUARE).is_empty
