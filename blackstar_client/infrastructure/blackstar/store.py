from __future__ import annotations

from typing import Any, List, Sequence, Tuple

import requests

from ...domain.errors import ChunkDecodeError
from ...domain.interfaces import ContentStore
from ...domain.models import Chunk, MediaFile
from ..http.transport import BlackstarTransport
from ..logging import get_logger

JSON_HEADERS = {"Content-Type": "application/json"}

logger = get_logger("blackstar_client.store")


def decode_chunks(data: Any) -> List[Chunk]:
    """Decode a JSON array of chunk objects, preserving server order."""
    if not isinstance(data, list):
        raise ChunkDecodeError(f"Expected a JSON array of chunks, got {type(data).__name__}")
    return [Chunk.from_dict(it) for it in data]


def media_form_fields(files: Sequence[MediaFile]) -> List[Tuple[str, Any]]:
    """
    Build multipart fields for a media upload.

    Each file ``i`` contributes ``<i>file`` (the content), ``<i>filename`` and
    ``<i>type`` fields, in upload order.
    """
    fields: List[Tuple[str, Any]] = []
    for i, f in enumerate(files):
        fields.append((f"{i}file", (f.filename, f.content, f.content_type)))
        fields.append((f"{i}filename", (None, f.filename)))
        fields.append((f"{i}type", (None, f.content_type)))
    return fields


class BlackstarContentStore(ContentStore):
    """Content store adapter for the Blackstar REST API."""

    def __init__(self, transport: BlackstarTransport) -> None:
        self._transport = transport

    def fetch_json(self, url: str) -> Any:
        r = self._transport.request("GET", url)
        return r.json()

    def fetch_chunks(self, url: str) -> List[Chunk]:
        return decode_chunks(self.fetch_json(url))

    def post_json(self, url: str, data: Any) -> requests.Response:
        return self._transport.request("POST", url, json=data, headers=JSON_HEADERS)

    def delete(self, url: str) -> requests.Response:
        return self._transport.request("DELETE", url, headers=JSON_HEADERS)

    def post_media(self, url: str, files: Sequence[MediaFile]) -> requests.Response:
        logger.info("Upload media | url=%s | files=%d", url, len(files))
        return self._transport.request("POST", url, files=media_form_fields(files))
