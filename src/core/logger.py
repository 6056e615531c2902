"""Logging setup. Modules simply use `logging.getLogger(__name__)`; this configures the `src` root once."""

import logging
import sys
from typing import Optional

from src.core.config import LoggingSettings, get_settings

ROOT_LOGGER_NAME = "src"


def setup_logger(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """
    Attach a console handler to the package logger. Calling it again replaces the handler (no duplicates).

    The library itself never calls this: the application embedding the engines (a web app, a console loop, ...)
    calls it once at startup. Until then records go wherever the root logger sends them.
    """
    settings = settings or get_settings().logging
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.log_level))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(settings.log_format))
    logger.addHandler(handler)
    return logger
