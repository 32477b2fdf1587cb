from __future__ import annotations

from typing import Any, Optional

import requests

from ...application.dto import ClientOptions
from ..logging import get_logger
from ..timeouts import http_timeout_seconds

HTTP_UNAUTHORIZED = 401
TOKEN_COOKIE = "t"

logger = get_logger("blackstar_client.transport")


class BlackstarTransport:
    """HTTP wrapper for the Blackstar API.

    Adds ``Authorization: Bearer <token>`` and the ``t`` session cookie when a
    token is configured, and hands 401 responses to ``options.auth_callback``
    before raising for status.
    """

    def __init__(self, options: Optional[ClientOptions] = None, session: Optional[requests.Session] = None) -> None:
        self.options = options or ClientOptions()
        self.session = session or requests.Session()

    @property
    def token_supplied(self) -> bool:
        return bool(self.options.token)

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        if self.token_supplied:
            headers["Authorization"] = f"Bearer {self.options.token}"
            self.session.cookies.set(TOKEN_COOKIE, self.options.token)
        kwargs.setdefault("timeout", http_timeout_seconds())
        logger.debug("HTTP request | method=%s | url=%s", method, url)
        r = self.session.request(method, url, headers=headers, **kwargs)
        if r.status_code == HTTP_UNAUTHORIZED:
            logger.warning("Unauthorized | url=%s", url)
            self.options.auth_callback(r)
        r.raise_for_status()
        return r

    def close(self) -> None:
        self.session.close()
