from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Sequence
from .models import Chunk, MediaFile


class ContentStore(ABC):
    """Port for the Blackstar content API (e.g., REST over HTTP)."""

    @abstractmethod
    def fetch_chunks(self, url: str) -> List[Chunk]:
        """GET a JSON array of chunks and decode it.

        Raises:
            Exception: Provider/network failures should surface; use-case decides.
        """
        raise NotImplementedError

    @abstractmethod
    def fetch_json(self, url: str) -> Any:
        """GET a URL and return its decoded JSON body."""
        raise NotImplementedError

    @abstractmethod
    def post_json(self, url: str, data: Any) -> Any:
        """POST a JSON body; returns the provider response."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, url: str) -> Any:
        """DELETE a resource; returns the provider response."""
        raise NotImplementedError

    @abstractmethod
    def post_media(self, url: str, files: Sequence[MediaFile]) -> Any:
        """POST files as a multipart form; returns the provider response."""
        raise NotImplementedError


class ContentBinder(ABC):
    """Port for binding chunk content into a rendered document."""

    @abstractmethod
    def bind(
        self,
        chunks: Sequence[Chunk],
        document: str,
        selector: Optional[Callable[[Chunk], Optional[str]]] = None,
    ) -> str:
        """Return ``document`` with each chunk's HTML placed in its target element."""
        raise NotImplementedError

    @abstractmethod
    def add_edit_links(self, document: str) -> str:
        """Return ``document`` with edit links appended to bound elements."""
        raise NotImplementedError
