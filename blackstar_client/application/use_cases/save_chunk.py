from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from ..urls import ApiRoutes
from ...domain.interfaces import ContentStore
from ...domain.models import Chunk
from ...infrastructure.logging import get_logger

logger = get_logger("blackstar_client.save")


def _chunk_payload(chunk: Union[Chunk, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(chunk, Chunk):
        return chunk.to_dict()
    return dict(chunk)


class SaveChunkUseCase:
    """Use-case: create a new chunk or update an existing one."""

    def __init__(self, store: ContentStore, routes: ApiRoutes) -> None:
        self._store = store
        self._routes = routes

    def create(self, chunk: Union[Chunk, Mapping[str, Any]]) -> Any:
        payload = _chunk_payload(chunk)
        logger.info("Create chunk | name=%s", payload.get("name"))
        return self._store.post_json(self._routes.collection_url, payload)

    def update(self, chunk: Union[Chunk, Mapping[str, Any]]) -> Any:
        payload = _chunk_payload(chunk)
        logger.info("Update chunk | id=%s | name=%s", payload.get("id"), payload.get("name"))
        return self._store.post_json(self._routes.chunk_url(payload.get("id")), payload)
