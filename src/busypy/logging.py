"""Logging configuration for the busypy command-line tools."""

import logging
import os
import sys
from typing import Optional, TextIO

LOG_LEVEL_ENV = "BUSYPY_LOG_LEVEL"
DEFAULT_LOG_FORMAT = "%(name)s %(levelname)s: %(message)s"


def level_from_env(default: int = logging.WARNING) -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def configure_logging(
    log_level: int = logging.WARNING,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_stream: Optional[TextIO] = None,
) -> None:
    """Send busypy log records to stderr.

    A handler is added to the root logger only if it has none, so embedding
    applications keep their own logging setup. The package logger level is
    always set, which is what ``-v`` relies on.
    """
    stream = log_stream or sys.stderr
    root_logger = logging.getLogger()
    if not root_logger.hasHandlers():
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(handler)

    library_root_name = __name__.split(".")[0]
    library_logger = logging.getLogger(library_root_name)
    library_logger.setLevel(log_level)
    library_logger.propagate = True
