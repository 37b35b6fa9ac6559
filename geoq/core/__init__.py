"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants (coordinate ranges, geohash levels, URLs)
- exceptions: Error taxonomy with stable error codes
- geometry: Spatial predicates and measurements on shapely geometries
"""
