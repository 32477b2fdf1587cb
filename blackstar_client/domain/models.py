from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .errors import AmbiguousOrEmptyQueryError, ChunkDecodeError

QUERY_REQUIREMENT = "A request must include exactly one of the following collections: ids, names, tags"


class RequestKind(str, Enum):
    """Retrieval mode of a chunk query."""

    IDS = "ids"
    NAMES = "names"
    TAGS = "tags"

    @property
    def segment(self) -> str:
        """Wire path segment for this kind (``byids``, ``bynames``, ``bytags``)."""
        return f"by{self.value}"


@dataclass(frozen=True)
class ChunkQuery:
    """A chunk query holding exactly one retrieval mode.

    Fields:
        kind: Which collection the query selects by.
        values: Ids, names or tags, in caller order (not sorted, not de-duplicated).
    """
    kind: RequestKind
    values: Tuple[Any, ...] = ()

    @classmethod
    def by_ids(cls, ids: Iterable[int]) -> "ChunkQuery":
        return cls(RequestKind.IDS, tuple(ids))

    @classmethod
    def by_names(cls, names: Iterable[str]) -> "ChunkQuery":
        return cls(RequestKind.NAMES, tuple(names))

    @classmethod
    def by_tags(cls, tags: Iterable[str]) -> "ChunkQuery":
        return cls(RequestKind.TAGS, tuple(tags))

    @classmethod
    def from_mapping(cls, query: Mapping[str, Any]) -> "ChunkQuery":
        """Build a query from a ``{ids|names|tags: [...]}`` mapping.

        Only key presence is tested: an empty list still selects its kind, and
        unrecognized keys are ignored.

        Raises:
            AmbiguousOrEmptyQueryError: when zero or several recognized keys are present.
        """
        present = [kind for kind in RequestKind if kind.value in query]
        if len(present) != 1:
            raise AmbiguousOrEmptyQueryError(QUERY_REQUIREMENT)
        kind = present[0]
        return cls(kind, tuple(query[kind.value] or ()))


_CHUNK_FIELDS = ("id", "name", "tags", "value", "html")


@dataclass(frozen=True)
class Chunk:
    """A named, tagged content unit stored by the CMS.

    Fields:
        id: Server identifier; ``None`` for a chunk not yet created.
        name: Chunk name (not guaranteed unique).
        tags: Tag labels.
        value: Opaque content payload as edited in the CMS.
        html: Rendered HTML, when the server supplies it.
        extra: Any other server fields, passed through untouched.
    """
    id: Optional[int]
    name: str
    tags: Tuple[str, ...] = ()
    value: Any = None
    html: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Chunk":
        if not isinstance(data, Mapping):
            raise ChunkDecodeError(f"Expected a chunk object, got {type(data).__name__}")
        raw_id = data.get("id")
        try:
            chunk_id = int(raw_id) if raw_id is not None else None
        except (TypeError, ValueError) as ex:
            raise ChunkDecodeError(f"Invalid chunk id: {raw_id!r}") from ex
        return cls(
            id=chunk_id,
            name=str(data.get("name") or ""),
            tags=tuple(str(t) for t in (data.get("tags") or ())),
            value=data.get("value"),
            html=data.get("html"),
            extra={k: v for k, v in data.items() if k not in _CHUNK_FIELDS},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        out.update({"id": self.id, "name": self.name, "tags": list(self.tags), "value": self.value})
        if self.html is not None:
            out["html"] = self.html
        return out


@dataclass(frozen=True)
class MediaFile:
    """A media upload.

    Fields:
        filename: Original file name sent to the server.
        content: Raw file bytes.
        content_type: MIME type (e.g., image/png).
    """
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"
