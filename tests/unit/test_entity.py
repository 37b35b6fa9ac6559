"""Tests for the Entity model and the geometry bridge.

Covers:
- lat,lon decodes to (lon, lat) order and encodes back
- Conversion is memoized; failures are not
- Geohash, WKT and GeoJSON decoding
- FeatureCollection handling of null geometries
- ``to_format`` point-only targets
"""

from __future__ import annotations

import json

import pytest
from shapely.geometry import LineString, Point

from geoq.core.exceptions import (
    EntityParseError,
    InvalidCoordinateError,
    MissingGeometryError,
    UnsupportedGeometryError,
)
from geoq.formats import FormatTag, feature_dict, to_format
from geoq.models.entity import Entity


class TestLatLon:
    """lat,lon text vs (lon, lat) geometry."""

    def test_coordinate_order(self) -> None:
        point = Entity.classify("45.5,-122.6").to_geometry()
        assert point.x == -122.6
        assert point.y == 45.5

    def test_encode_back(self) -> None:
        point = Entity.classify("45.5,-122.6").to_geometry()
        assert to_format(point, FormatTag.LATLON) == "45.5,-122.6"

    def test_latitude_out_of_range(self) -> None:
        entity = Entity.classify("100,0")
        assert entity.kind is FormatTag.LATLON
        with pytest.raises(InvalidCoordinateError):
            entity.to_geometry()

    def test_longitude_out_of_range(self) -> None:
        with pytest.raises(InvalidCoordinateError):
            Entity.classify("0,181").to_geometry()


class TestMemoization:
    """Geometry is computed at most once per entity."""

    def test_not_converted_until_asked(self) -> None:
        entity = Entity.classify("POINT (1 2)")
        assert entity.is_converted is False

    def test_same_geometries_returned(self) -> None:
        entity = Entity.classify("POINT (1 2)")
        first = entity.to_geometries()
        assert entity.is_converted is True
        assert entity.to_geometries() is first

    def test_failure_not_memoized(self) -> None:
        entity = Entity.classify("100,0")
        for _ in range(2):
            with pytest.raises(InvalidCoordinateError):
                entity.to_geometries()
        assert entity.is_converted is False

    def test_raw_text_preserved(self) -> None:
        entity = Entity.classify("  9q5  ", line_number=7)
        entity.to_geometry()
        assert entity.raw == "  9q5  "
        assert entity.line_number == 7


class TestDecoding:
    """Per-format decoders."""

    def test_geohash_is_cell_polygon(self) -> None:
        geom = Entity.classify("s").to_geometry()
        assert geom.geom_type == "Polygon"
        assert geom.bounds == (0.0, 0.0, 45.0, 45.0)

    def test_wkt(self) -> None:
        geom = Entity.classify("POINT (1 2)").to_geometry()
        assert to_format(geom, FormatTag.WKT) == "POINT (1 2)"

    def test_invalid_wkt(self) -> None:
        with pytest.raises(EntityParseError) as exc_info:
            Entity.classify("POINT (1 2").to_geometry()
        assert exc_info.value.text == "POINT (1 2"

    def test_geojson_geometry(self) -> None:
        geom = Entity.classify('{"type":"Point","coordinates":[1,2]}').to_geometry()
        assert json.loads(to_format(geom, FormatTag.GEOJSON_GEOMETRY)) == {
            "type": "Point",
            "coordinates": [1, 2],
        }

    def test_feature_without_geometry(self) -> None:
        entity = Entity.classify('{"type":"Feature","geometry":null,"properties":{}}')
        with pytest.raises(MissingGeometryError):
            entity.to_geometry()

    def test_feature_collection_skips_null_geometries(self, feature_collection_text: str) -> None:
        entity = Entity.classify(feature_collection_text)
        geometries = entity.to_geometries()
        assert [(g.x, g.y) for g in geometries] == [(1.0, 2.0), (3.0, 4.0)]

    def test_feature_collection_single_geometry(self, feature_collection_text: str) -> None:
        geom = Entity.classify(feature_collection_text).to_geometry()
        assert geom.geom_type == "GeometryCollection"
        assert len(geom.geoms) == 2

    def test_feature_collection_without_features(self) -> None:
        with pytest.raises(EntityParseError):
            Entity.classify('{"type":"FeatureCollection"}').to_geometry()

    def test_unrecognized(self) -> None:
        with pytest.raises(EntityParseError) as exc_info:
            Entity.classify("hello").to_geometry()
        assert exc_info.value.code == "ENTITY_UNRECOGNIZED"


class TestToFormat:
    """Encoding geometries."""

    def test_geohash_golden_value(self) -> None:
        point = Point(-74.0445, 40.6892)
        assert to_format(point, FormatTag.GEOHASH, precision=7) == "dr5r7p4"

    def test_latlon_requires_point(self) -> None:
        with pytest.raises(UnsupportedGeometryError):
            to_format(LineString([(0, 0), (1, 1)]), FormatTag.LATLON)

    def test_geohash_requires_point(self) -> None:
        with pytest.raises(UnsupportedGeometryError):
            to_format(LineString([(0, 0), (1, 1)]), FormatTag.GEOHASH)

    def test_unrecognized_target(self) -> None:
        with pytest.raises(UnsupportedGeometryError):
            to_format(Point(0, 0), FormatTag.UNRECOGNIZED)

    def test_feature(self) -> None:
        data = json.loads(to_format(Point(1, 2), FormatTag.GEOJSON_FEATURE))
        assert data["type"] == "Feature"
        assert data["properties"] == {}
        assert data["geometry"]["coordinates"] == [1, 2]

    def test_feature_collection(self) -> None:
        data = json.loads(to_format(Point(1, 2), FormatTag.GEOJSON_FEATURE_COLLECTION))
        assert data["type"] == "FeatureCollection"
        assert len(data["features"]) == 1

    def test_feature_dict_null_geometry(self) -> None:
        assert feature_dict(None, {"a": 1}) == {
            "type": "Feature",
            "geometry": None,
            "properties": {"a": 1},
        }


class TestLatLonRoundTrip:
    """lat,lon -> Point -> lat,lon."""

    @pytest.mark.parametrize(
        ("lat", "lon"),
        [(0.0, 0.0), (45.5, -122.6), (-90.0, 180.0), (90.0, -180.0), (-33.8688, 151.2093)],
    )
    def test_round_trip(self, lat: float, lon: float) -> None:
        entity = Entity.classify(f"{lat},{lon}")
        assert entity.kind is FormatTag.LATLON
        text = to_format(entity.to_geometry(), FormatTag.LATLON)
        out_lat, out_lon = (float(part) for part in text.split(","))
        assert out_lat == pytest.approx(lat)
        assert out_lon == pytest.approx(lon)
