"""Help texts for the geoq command line."""

MAIN_HELP = """geoq - GeoSpatial utility belt.

\b
geoq reads newline-delimited entities from STDIN. Each line may be:
  lat,lon pairs          45.5,-122.6
  geohashes              9q5
  Well-Known Text        POINT (-122.6 45.5)
  GeoJSON                {"type":"Point","coordinates":[-122.6,45.5]}
                         (geometries, Features or FeatureCollections)

Lines that cannot be read are reported on STDERR and skipped.
Set GEOQ_STRICT=1 to stop at the first unreadable line instead.
"""

READ_TEXT = """Every geoq command that reads STDIN accepts the same input formats,
one entity per line, blank lines ignored. Formats are detected in
this order, first match wins:

  1. lat,lon   two decimal numbers separated by a comma. Latitude comes
               first. Out-of-range values are reported when the line is
               converted, not when it is read.
  2. geohash   1-12 characters of the base 32 geohash alphabet
               (0-9 and b-z without a, i, l, o). Read as the cell's
               bounding box.
  3. WKT       text starting with POINT, LINESTRING, POLYGON, MULTIPOINT,
               MULTILINESTRING, MULTIPOLYGON or GEOMETRYCOLLECTION
               (any case).
  4. GeoJSON   a JSON object whose "type" is a geometry type, "Feature"
               or "FeatureCollection". A Feature with a null geometry
               cannot be converted; features with null geometries inside
               a FeatureCollection are skipped.

Anything else is unrecognized.
"""

FILTER_HELP = """Select features based on geospatial predicates.

\b
Query entities are given as a single QUERY argument, or one per line in
a --query-file. An input entity is selected if the predicate holds
against ANY query. --negate inverts the selection.

\b
Examples:
  cat points.txt | geoq filter intersects 9q5
  cat points.txt | geoq filter contains --query-file zones.geojson
  cat points.txt | geoq filter intersects -n 'POLYGON ((0 0, 1 0, 1 1, 0 1, 0 0))'
"""

JSON_MUNGE_HELP = """Attempt to convert arbitrary JSON to a GeoJSON Feature.

\b
GeoJSON input passes through. Otherwise geoq looks for, in order:
  lat/latitude + lon/lng/long/longitude members   -> Point
  a geometry, geom, wkt or geojson member          -> that geometry
  a geohash member                                 -> the geohash cell
Remaining members become the Feature's properties.
"""

CENTROID_HELP = """Output the centroid of each entity as lat,lon."""

WHEREAMI_HELP = """Output your approximate location as lat,lon.

Uses IP geolocation (GEOQ_WHEREAMI_URL, ipinfo.io by default), so it
needs network access and is only as accurate as the service.
"""

MEASURE_HELP = """Measure geometries."""

DISTANCE_HELP = """Geodesic distance in meters from QUERY to each entity.

For non-point geometries the distance is taken between their nearest
points. Entities touching the query are 0 meters away.
"""

COORD_COUNT_HELP = """Count the coordinates of each entity."""

SIMPLIFY_HELP = """Simplify geometries with the Douglas-Peucker algorithm.

\b
EPSILON is the tolerance in degrees. With --to-coord-count N, EPSILON is
the starting tolerance and is doubled until each geometry has at most N
coordinates. Output is a GeoJSON geometry per line.
"""

BBOX_HELP = """Generate bounding boxes for geometries.

\b
By default prints one bounding-box polygon (WKT) per input entity.
  --embed  print inputs as GeoJSON Features with a "bbox" member
  --all    give a single bbox for all inputs
"""

SNIP_HELP = """Clip each entity to the QUERY geometry (output as WKT).

Entities that do not overlap the query produce no output.
"""

MAP_HELP = """View entities on a map using geojson.io."""

SHP_HELP = """Read a shapefile and convert it to GeoJSON Features.

PATH is the .shp file; the .dbf file is expected next to it.
"""
