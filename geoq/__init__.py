"""geoq - GeoSpatial utility belt.

Command line tool that reads newline-delimited geospatial entities
(lat,lon pairs, geohashes, WKT and GeoJSON) from STDIN, converts them
on demand to shapely geometries, and writes converted, filtered or
measured results to STDOUT.
"""

__version__ = "0.1.0"
