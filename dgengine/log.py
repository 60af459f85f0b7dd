"""Engine-wide logger writing to standard output or to a file."""

from __future__ import annotations

import logging
import sys

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_FORMAT = "[%(asctime)s] %(name)s: %(message)s"
_DATE_FORMAT = "%H:%M:%S"

_logger: logging.Logger | None = None


def _install(name: str, handler: logging.Handler) -> logging.Logger:
    global _logger
    handler.setFormatter(logging.Formatter(_FORMAT, _DATE_FORMAT))
    logger = logging.getLogger(name)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(TRACE)
    logger.propagate = False
    _logger = logger
    return logger


def init_stdout(name: str) -> logging.Logger:
    """Make the engine logger write every level to standard output."""
    return _install(name, logging.StreamHandler(sys.stdout))


def init_file(name: str, file_name: str) -> logging.Logger:
    """Make the engine logger write every level to ``file_name``."""
    return _install(name, logging.FileHandler(file_name, encoding="utf-8"))


def get_logger() -> logging.Logger:
    """Return the engine logger; it must have been initialised first."""
    if _logger is None:
        raise RuntimeError("logger has not been initialised")
    return _logger