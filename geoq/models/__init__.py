"""Data models.

- Entity: one classified, lazily-convertible input record
- FormatTag: closed enumeration of supported encodings
"""

from geoq.formats import FormatTag
from geoq.models.entity import Entity

__all__ = [
    "Entity",
    "FormatTag",
]
