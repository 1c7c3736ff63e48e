"""
Logger factory shared by the client library, the proxy and the review client.

Messages use `%s` formatting with a `| key=value` suffix for identifiers, e.g.
`logger.info("Flashcard stored | id=%s", card.id)`. The level defaults to
`FLASHDECK_LOG_LEVEL` (a level name such as DEBUG or WARNING), else INFO.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_level(level: int | str | None = None) -> int:
    if level is None:
        level = os.getenv("FLASHDECK_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str, level: int | str | None = None) -> logging.Logger:
    """Create or reuse a named logger with a single stream handler."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    return logger


__all__ = ["LOG_FORMAT", "get_logger", "resolve_level"]
