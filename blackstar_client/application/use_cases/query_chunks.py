from __future__ import annotations

from ..collection import ChunkCollection, enrich
from ..dto import QueryChunksRequest
from ..urls import ApiRoutes
from ...domain.errors import ContractError
from ...domain.interfaces import ContentStore
from ...infrastructure.logging import get_logger

logger = get_logger("blackstar_client.query")


class QueryChunksUseCase:
    """Use-case: resolve the request URL, fetch chunks and enrich the result."""

    def __init__(self, store: ContentStore, routes: ApiRoutes) -> None:
        self._store = store
        self._routes = routes

    def execute(self, req: QueryChunksRequest) -> ChunkCollection:
        """
        Fetches the chunk list selected by the request and wraps it with lookups.

        The URL is built before any network call, so an invalid query raises
        without a request being sent.

        Args:
            req: Query (ids/names/tags), admin search string, or neither for all chunks.

        Returns:
            ChunkCollection: Enriched view over the decoded chunks.

        Raises:
            AmbiguousOrEmptyQueryError: When ``req.query`` has zero or several recognized keys.
            ContractError: When both a query and a search are given.
        """
        if req.query is not None and req.search is not None:
            raise ContractError("Pass either a query or a search, not both")
        if req.query is not None:
            url = self._routes.query_url(req.query)
        elif req.search is not None:
            url = self._routes.admin_search_url(req.search)
        else:
            url = self._routes.collection_url
        chunks = self._store.fetch_chunks(url)
        logger.info("Fetch chunks | url=%s | count=%d", url, len(chunks))
        return enrich(chunks)
