"""
Blackstar CMS client.

Example:
    client = Client("https://localhost:2999", ClientOptions(token="9f7sd9f7sf..."))
    chunks = client.get({"names": ["heading", "footer"]})
    heading = chunks.by_name("heading")
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

import requests

from .application.classifier import QueryLike
from .application.collection import ChunkCollection, ChunkItem, enrich
from .application.dto import ClientOptions, QueryChunksRequest
from .application.urls import ApiRoutes
from .application.use_cases.query_chunks import QueryChunksUseCase
from .application.use_cases.save_chunk import SaveChunkUseCase
from .domain.interfaces import ContentBinder, ContentStore
from .domain.models import Chunk, MediaFile
from .infrastructure.blackstar.store import BlackstarContentStore
from .infrastructure.config import blackstar_token, blackstar_url, show_edit_controls
from .infrastructure.error_reporter import ErrorReporter
from .infrastructure.binding.binder import HtmlBinder, Selector
from .infrastructure.http.transport import BlackstarTransport

ChunkLike = Union[Chunk, Mapping[str, Any]]


class Client:
    """A Blackstar CMS client bound to one server URL (e.g. http://localhost:2999)."""

    def __init__(
        self,
        url: str,
        options: Optional[ClientOptions] = None,
        store: Optional[ContentStore] = None,
        binder: Optional[ContentBinder] = None,
    ) -> None:
        self.options = options or ClientOptions()
        self.routes = ApiRoutes(url)
        self.transport = BlackstarTransport(self.options)
        self._store = store or BlackstarContentStore(self.transport)
        self._binder = binder or HtmlBinder(self.routes, self.options.show_edit_controls)

    @classmethod
    def from_env(cls) -> "Client":
        """Build a client from BLACKSTAR_URL, BLACKSTAR_TOKEN and BLACKSTAR_SHOW_EDIT_CONTROLS."""
        return cls(
            blackstar_url(),
            ClientOptions(show_edit_controls=show_edit_controls(), token=blackstar_token()),
        )

    @property
    def server_url(self) -> str:
        return self.routes.server_url

    @property
    def api_url(self) -> str:
        return self.routes.content_url

    def get(self, query: QueryLike) -> ChunkCollection:
        """
        Query chunks by ids OR by names OR by tags.

        Ids and names are OR queries (chunks named 'heading' or 'footer'); tags
        are an AND query (chunks tagged both 'blackstarpedia' and 'english').

        Examples:
            client.get({"ids": [1, 2, 3]})
            client.get({"names": ["heading", "footer"]})
            client.get(ChunkQuery.by_tags(["blackstarpedia", "english"]))

        Raises:
            AmbiguousOrEmptyQueryError: Before any request when the query does not
                hold exactly one of ids, names, tags.
        """
        return QueryChunksUseCase(self._store, self.routes).execute(QueryChunksRequest(query=query))

    def get_all(self) -> ChunkCollection:
        return QueryChunksUseCase(self._store, self.routes).execute(QueryChunksRequest())

    def get_all_tags(self) -> List[str]:
        return [str(t) for t in (self._store.fetch_json(self.routes.tags_url) or [])]

    def create(self, chunk: ChunkLike) -> requests.Response:
        return SaveChunkUseCase(self._store, self.routes).create(chunk)

    def update(self, chunk: ChunkLike) -> requests.Response:
        return SaveChunkUseCase(self._store, self.routes).update(chunk)

    def delete(self, chunk_id: int) -> requests.Response:
        return self._store.delete(self.routes.chunk_url(chunk_id))

    def admin_search(self, query: str) -> ChunkCollection:
        return QueryChunksUseCase(self._store, self.routes).execute(QueryChunksRequest(search=query))

    def media_search(self, query: str) -> Any:
        return self._store.fetch_json(self.routes.media_search_url(query))

    def create_media(self, files: Sequence[MediaFile]) -> requests.Response:
        return self._store.post_media(self.routes.media_url, files)

    def delete_media(self, media_hash: str) -> requests.Response:
        return self._store.delete(self.routes.media_item_url(media_hash))

    def enrich(self, chunks: Sequence[ChunkItem]) -> ChunkCollection:
        """Add by_id/by_name/by_tag lookups to a chunk list (decoded chunks or raw JSON objects)."""
        return enrich(chunks)

    def url_for(self, chunk: ChunkLike) -> str:
        """Edit URL for a chunk; useful when binding content yourself (templates, SPAs)."""
        return self.routes.edit_url(chunk)

    def bind(self, chunks: Sequence[Chunk], document: str, selector: Optional[Selector] = None) -> str:
        return self._binder.bind(chunks, document, selector)

    def add_edit_links(self, document: str) -> str:
        """
        Add edit links to every element with a ``data-blackstar-id`` attribute.

        ``bind`` already calls this; it is exposed for documents bound by other means.
        Links carry the ``blackstar-edit-link`` css class.
        """
        return self._binder.add_edit_links(document)

    def error_reporter(self) -> ErrorReporter:
        return ErrorReporter(self.transport, self.routes.error_report_url)

    def close(self) -> None:
        self.transport.close()
