from __future__ import annotations

from .config import env_str

DEFAULT_HTTP_TIMEOUT = 15.0


def http_timeout_seconds() -> float:
    """
    Per-request timeout for Blackstar HTTP calls.
    Defaults to 15 seconds when BLACKSTAR_HTTP_TIMEOUT is not set, invalid or non-positive.
    """
    try:
        value = float(env_str("BLACKSTAR_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT)))
    except ValueError:
        return DEFAULT_HTTP_TIMEOUT
    return value if value > 0 else DEFAULT_HTTP_TIMEOUT
