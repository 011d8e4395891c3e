# circuitsim/logging.py
"""Logging helpers. Every module gets its logger through get_logger, so all
circuitsim output shares one handler setup and one level switch."""

from __future__ import annotations

import logging
import sys
from typing import Dict, Optional, Union

_DEFAULT_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: Dict[str, logging.Logger] = {}


def _to_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached ``circuitsim.*`` logger for ``name``.

    ``name`` is usually ``__name__`` of the calling module. Names outside the
    package are nested under ``circuitsim.``.
    """
    if name is None:
        name = "circuitsim"
    if name != "circuitsim" and not name.startswith("circuitsim."):
        name = f"circuitsim.{name}"

    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[name] = logger
    return logger


def set_log_level(level: Union[int, str]) -> None:
    """Set the level of every circuitsim logger, existing and future."""
    global _DEFAULT_LEVEL
    level = _to_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _DEFAULT_LEVEL = level


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Replace the handlers of all circuitsim loggers.

    Args:
        level: Logging level or its name (``"DEBUG"``, ``"INFO"``, ...).
        format_string: Record format. Defaults to ``[LEVEL] name: message``.
        stream: Output stream. Defaults to ``sys.stderr``.
    """
    global _DEFAULT_LEVEL
    level = _to_level(level)
    if stream is None:
        stream = sys.stderr
    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _DEFAULT_LEVEL = level
