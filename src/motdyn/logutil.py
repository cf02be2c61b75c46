from __future__ import annotations

import logging
import sys

_LOGGER_INITIALIZED = False


def init_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stderr handler to the package logger; stdout carries the report."""
    global _LOGGER_INITIALIZED
    logger = logging.getLogger("motdyn")
    if _LOGGER_INITIALIZED:
        return logger
    resolved = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(resolved)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s"))
    handler.setLevel(resolved)
    logger.addHandler(handler)
    _LOGGER_INITIALIZED = True
    logger.debug("Logging initialized (level=%s)", level)
    return logger
