"""Centralised logging helpers for clientgen."""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional

ROOT_LOGGER_NAME = "clientgen"

_LOGGER_CACHE: Dict[str, logging.Logger] = {}
_HANDLER: Optional[logging.Handler] = None


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a single console handler to the ``clientgen`` logger."""
    global _HANDLER
    log_level = (level or os.getenv("CLIENTGEN_LOG_LEVEL") or "INFO").upper()
    logger = get_logger(ROOT_LOGGER_NAME)
    if _HANDLER is None:
        _HANDLER = logging.StreamHandler()
        _HANDLER.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(_HANDLER)
    logger.setLevel(getattr(logging, log_level, logging.INFO))
