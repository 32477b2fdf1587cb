from __future__ import annotations

from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union, overload

from ..domain.models import Chunk

ChunkItem = Union[Chunk, Mapping[str, Any]]


def _field(item: ChunkItem, name: str, default: Any = None) -> Any:
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)


class ChunkCollection(Sequence[ChunkItem]):
    """Read-only view over a fetched chunk list with id/name/tag lookups.

    Items may be decoded ``Chunk`` records or the raw JSON objects the server
    returned. The wrapped list is neither copied nor reordered; lookups scan it
    on demand. Slices and ``by_tag`` results are plain lists and carry no lookups.
    """

    __slots__ = ("_chunks",)

    def __init__(self, chunks: List[ChunkItem]) -> None:
        self._chunks = chunks

    @overload
    def __getitem__(self, index: int) -> ChunkItem: ...

    @overload
    def __getitem__(self, index: slice) -> List[ChunkItem]: ...

    def __getitem__(self, index):
        return self._chunks[index]

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[ChunkItem]:
        return iter(self._chunks)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ChunkCollection):
            return self._chunks == other._chunks
        if isinstance(other, list):
            return self._chunks == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"ChunkCollection({self._chunks!r})"

    @property
    def chunks(self) -> List[ChunkItem]:
        """The underlying list (same instance that was enriched)."""
        return self._chunks

    def by_id(self, chunk_id: int) -> Optional[ChunkItem]:
        return next((c for c in self._chunks if _field(c, "id") == chunk_id), None)

    def by_name(self, name: str) -> Optional[ChunkItem]:
        return next((c for c in self._chunks if _field(c, "name") == name), None)

    def by_tag(self, tag: str) -> List[ChunkItem]:
        """All chunks carrying ``tag``; empty list when none do."""
        return [c for c in self._chunks if tag in (_field(c, "tags") or ())]


def enrich(chunks: Union[ChunkCollection, Sequence[ChunkItem]]) -> ChunkCollection:
    """Wrap chunks in a ChunkCollection; already-enriched input is returned as-is."""
    if isinstance(chunks, ChunkCollection):
        return chunks
    if isinstance(chunks, list):
        return ChunkCollection(chunks)
    return ChunkCollection(list(chunks))
