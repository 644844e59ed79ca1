"""Query assembly: the fluent builder and its record extension point."""

from surrealqb.query.builder import QueryBuilder
from surrealqb.query.protocol import Settable

__all__ = [
    "QueryBuilder",
    "Settable",
]
