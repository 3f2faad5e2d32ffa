"""Logging helpers for splitrand.

Library modules log through ``get_logger(__name__)``, which keeps every
logger under the ``splitrand`` namespace, and never touch handlers
themselves.  Embedding applications opt in to output by calling
:func:`configure_logging` (stderr) and/or :func:`add_file_handler`; both only
attach to the ``splitrand`` logger so the host's root configuration is left
alone.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional


PACKAGE_LOGGER = "splitrand"

_STREAM_HANDLER: Optional[logging.Handler] = None
_FILE_HANDLERS: dict[str, logging.Handler] = {}
_LOG_FORMAT = "%(asctime)s,%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _formatter() -> logging.Formatter:
    return logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a stderr handler to the package logger once."""
    global _STREAM_HANDLER
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if _STREAM_HANDLER is None:
        handler = logging.StreamHandler()
        handler.setFormatter(_formatter())
        logger.addHandler(handler)
        _STREAM_HANDLER = handler
    _STREAM_HANDLER.setLevel(level)
    return logger


def add_file_handler(path: Path, level: int = logging.INFO) -> None:
    """Mirror package logs into ``path`` once per resolved path."""
    resolved = str(path.resolve())
    if resolved in _FILE_HANDLERS:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(_formatter())
    logger = logging.getLogger(PACKAGE_LOGGER)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    logger.addHandler(handler)
    _FILE_HANDLERS[resolved] = handler


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a logger under the package namespace with optional level override."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


__all__ = ["PACKAGE_LOGGER", "add_file_handler", "configure_logging", "get_logger"]
