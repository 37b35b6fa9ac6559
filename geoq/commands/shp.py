"""``shp``: read a shapefile and emit one GeoJSON Feature per record.

Records are read with fiona (the ``.dbf`` must sit next to the ``.shp``)
and reprojected to WGS 84 when the shapefile declares another CRS. Each
record becomes a GeoJSON Feature entity, so it can be piped back into
any other geoq command.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

import shapely
from shapely.geometry import shape

from geoq.core.constants import WGS84_CRS
from geoq.core.exceptions import ConfigurationError
from geoq.formats import FormatTag, feature_dict
from geoq.models.entity import Entity

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger("geoq.commands.shp")


def _reprojector(crs_wkt: str) -> Callable[[BaseGeometry], BaseGeometry] | None:
    """Transform to WGS 84, or None when the source already is (or is unknown)."""
    if not crs_wkt:
        return None

    from pyproj import CRS, Transformer

    source = CRS.from_wkt(crs_wkt)
    if source.to_epsg() == 4326:
        return None

    logger.info("Reprojecting shapefile records from %s to %s", source.to_string(), WGS84_CRS)
    transformer = Transformer.from_crs(source, WGS84_CRS, always_xy=True)
    return lambda geom: shapely.transform(geom, transformer.transform, interleaved=False)


def _properties(raw: object) -> dict[str, Any]:
    if raw is None:
        return {}
    return {str(key): value for key, value in dict(raw).items()}  # type: ignore[call-overload]


def read_shapefile(path: Path | str) -> Iterator[Entity]:
    """Yield one GeoJSON Feature entity per shapefile record.

    Raises:
        ConfigurationError: If the file cannot be opened.
    """
    import fiona
    from fiona.errors import FionaError

    shp_path = Path(path)
    try:
        collection = fiona.open(str(shp_path))
    except (OSError, FionaError) as exc:
        msg = f"Cannot open shapefile {shp_path}: {exc}"
        raise ConfigurationError(msg, code="SHAPEFILE_UNREADABLE") from exc

    with collection:
        reproject = _reprojector(collection.crs_wkt)
        for idx, record in enumerate(collection, start=1):
            geom_data = record.get("geometry")
            geom = shape(geom_data) if geom_data is not None else None
            if geom is not None and reproject is not None:
                geom = reproject(geom)
            feature = feature_dict(geom, _properties(record.get("properties")))
            raw = json.dumps(feature, separators=(",", ":"), default=str)
            yield Entity(raw=raw, kind=FormatTag.GEOJSON_FEATURE, line_number=idx)
