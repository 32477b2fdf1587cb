from __future__ import annotations

import logging
import os
from typing import Optional


def env_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip() or default


def is_truthy(raw: Optional[str], default: bool = False) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes"}


def env_flag(name: str, default: bool = False) -> bool:
    return is_truthy(os.getenv(name), default)


def blackstar_url() -> str:
    return env_str("BLACKSTAR_URL", "http://localhost:2999")


def blackstar_token() -> Optional[str]:
    token = os.getenv("BLACKSTAR_TOKEN", "").strip()
    return token or None


def show_edit_controls() -> bool:
    return env_flag("BLACKSTAR_SHOW_EDIT_CONTROLS")


def log_level() -> int:
    """BLACKSTAR_LOG_LEVEL as a logging level (name or number); INFO when unknown."""
    raw = env_str("BLACKSTAR_LOG_LEVEL", "INFO").upper()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.INFO
