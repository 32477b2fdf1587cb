from __future__ import annotations

import platform
import sys
import traceback
from types import TracebackType
from typing import Any, Dict, Optional, Type

import requests

from .http.transport import BlackstarTransport
from .logging import get_logger

logger = get_logger("blackstar_client.errors")


def build_error_report(exc: BaseException) -> Dict[str, Any]:
    """Describe an exception as the ``{file, line, col, message, stack, context}`` report body."""
    frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    last = frames[-1] if frames else None
    return {
        "file": last.filename if last else None,
        "line": last.lineno if last else None,
        "col": getattr(last, "colno", None) if last else None,
        "message": f"{type(exc).__name__}: {exc}",
        "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        "context": f"{requests.utils.default_user_agent()} {platform.platform()}",
    }


class ErrorReporter:
    """Posts unhandled client errors to the server's ``api/throw`` endpoint."""

    def __init__(self, transport: BlackstarTransport, url: str) -> None:
        self._transport = transport
        self._url = url
        self._previous_hook = None

    def report(self, exc: BaseException) -> bool:
        """Send one report; failures to deliver are logged, never raised."""
        try:
            self._transport.request("POST", self._url, json=build_error_report(exc))
        except requests.RequestException as ex:
            logger.warning("Error report failed | url=%s | error=%s", self._url, ex)
            return False
        return True

    def install(self) -> None:
        """Report unhandled exceptions, then defer to the previous ``sys.excepthook``."""
        if self._previous_hook is not None:
            return
        self._previous_hook = sys.excepthook
        sys.excepthook = self._excepthook

    def uninstall(self) -> None:
        if self._previous_hook is None:
            return
        sys.excepthook = self._previous_hook
        self._previous_hook = None

    def _excepthook(
        self,
        exc_type: Type[BaseException],
        exc: BaseException,
        tb: Optional[TracebackType],
    ) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            self.report(exc.with_traceback(tb))
        previous = self._previous_hook or sys.__excepthook__
        previous(exc_type, exc, tb)
