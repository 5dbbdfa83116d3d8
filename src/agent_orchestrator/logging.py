"""Logging configuration for the orchestrator.

Every module logs through ``get_logger(__name__)``, so all records land under
the ``agent_orchestrator`` logger. ``setup_logging`` attaches a single stderr
handler there. Records carry the thread name because agent calls from the
API server run on worker threads.
"""

import logging
import os
import sys

PACKAGE_LOGGER = "agent_orchestrator"
LOG_LEVEL_ENV = "AGENT_ORCHESTRATOR_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(threadName)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: str | None = None) -> int:
    """Turn a level name into a logging level.

    Precedence is the explicit argument, then AGENT_ORCHESTRATOR_LOG_LEVEL,
    then WARNING. An unknown name falls back to WARNING with a notice on stderr.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LEVEL).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        print(f"Warning: Invalid log level '{name}', using {DEFAULT_LEVEL}", file=sys.stderr)
        return logging.WARNING
    return numeric


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the package logger.

    Safe to call more than once: the handler is created on the first call and
    later calls only change the level.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR), usually from the
            ``--log-level`` flag or ``Settings.log_level``.

    Returns:
        The ``agent_orchestrator`` logger.
    """
    numeric = resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric)

    handler = next((h for h in logger.handlers if getattr(h, "_orchestrator", False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler._orchestrator = True
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    handler.setLevel(numeric)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)
