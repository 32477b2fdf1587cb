from __future__ import annotations

import logging

from .config import log_level

ROOT_LOGGER = "blackstar_client"
LOG_FORMAT = "%(levelname)s | %(name)s | %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``blackstar_client`` namespace.

    The first call attaches one stderr handler to the package logger, leveled
    by BLACKSTAR_LOG_LEVEL. Records still propagate to the root logger.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    package = logging.getLogger(ROOT_LOGGER)
    if not package.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package.addHandler(handler)
        package.setLevel(log_level())
    return logging.getLogger(name)
