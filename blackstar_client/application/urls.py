from __future__ import annotations

import re
from typing import Any, Mapping, Union

from ..domain.errors import ContractError
from ..domain.models import Chunk
from .classifier import QueryLike, to_chunk_query

SEPARATOR = "/"


def _with_trailing_slash(url: str) -> str:
    return url if re.search(r".+/$", url) else url + SEPARATOR


def build_path(base_url: str, query: QueryLike) -> str:
    """Render a chunk query as ``<base>/by<kind>/<v>/<v>/...``.

    Values keep their input order and are not escaped; names and tags must not
    contain ``/``. An empty value list yields ``<base>/by<kind>/``.

    Raises:
        AmbiguousOrEmptyQueryError: propagated unchanged from classification.
    """
    cq = to_chunk_query(query)
    suffix = SEPARATOR.join(str(v) for v in cq.values)
    return f"{_with_trailing_slash(base_url)}{cq.kind.segment}/{suffix}"


class ApiRoutes:
    """Fixed Blackstar endpoints derived from the server URL."""

    def __init__(self, url: str) -> None:
        self.server_url = _with_trailing_slash(url)
        self.content_url = self.server_url + "api/content/"

    @property
    def collection_url(self) -> str:
        return self.content_url[:-1]

    @property
    def tags_url(self) -> str:
        return self.server_url + "api/tags"

    @property
    def media_url(self) -> str:
        return self.server_url + "api/media"

    @property
    def error_report_url(self) -> str:
        return self.server_url + "api/throw"

    def query_url(self, query: QueryLike) -> str:
        return build_path(self.content_url, query)

    def chunk_url(self, chunk_id: Any) -> str:
        return f"{self.content_url}{chunk_id}"

    def admin_search_url(self, query: str) -> str:
        return f"{self.server_url}api/adminSearch/{query}"

    def media_search_url(self, query: str) -> str:
        return f"{self.server_url}api/mediaSearch/{query}"

    def media_item_url(self, media_hash: str) -> str:
        return f"{self.media_url}/{media_hash}"

    def edit_url(self, chunk: Union[Chunk, Mapping[str, Any], int]) -> str:
        """Full edit URL for a chunk (or chunk id) in the CMS admin.

        Raises:
            ContractError: when the chunk has no id (not created yet).
        """
        if isinstance(chunk, Chunk):
            chunk_id = chunk.id
        elif isinstance(chunk, Mapping):
            chunk_id = chunk.get("id")
        else:
            chunk_id = chunk
        if chunk_id is None:
            raise ContractError("Cannot build an edit URL for a chunk without an id")
        return f"{self.server_url}chunk/{chunk_id}"
