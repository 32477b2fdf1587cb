from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .classifier import QueryLike


def _ignore_response(_: Any) -> None:
    return None


@dataclass(frozen=True)
class ClientOptions:
    show_edit_controls: bool = False
    token: Optional[str] = None
    auth_callback: Callable[[Any], None] = _ignore_response


@dataclass(frozen=True)
class QueryChunksRequest:
    """Which chunk list to fetch.

    ``query`` selects by ids/names/tags; ``search`` runs an admin search. With
    neither set, every chunk is fetched.
    """
    query: Optional[QueryLike] = None
    search: Optional[str] = None
