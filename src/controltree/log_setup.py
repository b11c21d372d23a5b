"""
Logging helpers for the connector.

Every module logs through ``logging.getLogger(__name__)``. This module adds
the TRACE level used for the very chatty per-property messages and an
idempotent stderr handler for the package logger.
"""

import logging
import os
import sys
from typing import Optional, Union

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

PACKAGE_LOGGER_NAME = "controltree"
LOG_LEVEL_ENV = "CONTROLTREE_LOG_LEVEL"

_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def trace(logger: logging.Logger, msg: str, *args) -> None:
    """Log at TRACE level."""
    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, msg, *args)


def parse_level(level: Union[int, str, None], default: int = logging.WARNING) -> int:
    """Turn a level name or number into a logging level."""
    if level is None:
        return default
    if isinstance(level, int):
        return level
    return _LEVELS.get(level.strip().lower(), default)


def configure_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """Create or update the package logger.

    - CONTROLTREE_LOG_LEVEL overrides ``level`` on every call.
    - Exactly one stderr StreamHandler is kept on the package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    env_level = (os.getenv(LOG_LEVEL_ENV) or "").strip()
    resolved = parse_level(env_level or level, default=logging.WARNING)
    logger.setLevel(resolved)

    stream_handler: Optional[logging.StreamHandler] = None
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and getattr(handler, "stream", None) is sys.stderr:
            stream_handler = handler
            break

    if stream_handler is None:
        stream_handler = logging.StreamHandler(stream=sys.stderr)
        logger.addHandler(stream_handler)

    stream_handler.setFormatter(logging.Formatter(
        fmt="[%(asctime)s] [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    ))
    return logger


def set_module_level(module_name: str, level: Union[int, str]) -> None:
    """Set the level of one connector module, e.g. ``set_module_level("verifier", "trace")``."""
    name = module_name if module_name.startswith(PACKAGE_LOGGER_NAME) else f"{PACKAGE_LOGGER_NAME}.{module_name}"
    logging.getLogger(name).setLevel(parse_level(level))
