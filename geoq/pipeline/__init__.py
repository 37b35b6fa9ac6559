"""Streaming pipeline: entity stream, query set and predicate filter.

Data flow: text source -> EntityStream -> Entity (lazy) -> geometry on
demand -> filter / output.
"""

from geoq.pipeline.filter import Predicate, filter_entities, matches
from geoq.pipeline.query import QueryEntry, QuerySet
from geoq.pipeline.stream import EntityStream

__all__ = [
    "EntityStream",
    "Predicate",
    "QueryEntry",
    "QuerySet",
    "filter_entities",
    "matches",
]
