from __future__ import annotations

from typing import Any, Mapping, Union

from ..domain.models import ChunkQuery, RequestKind

QueryLike = Union[ChunkQuery, Mapping[str, Any]]


def to_chunk_query(query: QueryLike) -> ChunkQuery:
    """Normalize a mapping or ChunkQuery into a ChunkQuery.

    Raises:
        AmbiguousOrEmptyQueryError: when a mapping has zero or several of ids/names/tags.
    """
    if isinstance(query, ChunkQuery):
        return query
    return ChunkQuery.from_mapping(query)


def classify(query: QueryLike) -> RequestKind:
    """Return which single retrieval mode (ids / names / tags) a query selects."""
    return to_chunk_query(query).kind
