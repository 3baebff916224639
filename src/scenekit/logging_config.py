"""Logging setup for the scenekit command line tool.

Log records go to stderr so that they never interleave with the results the
commands print on stdout.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: int = logging.WARNING, log_file: str | None = None) -> logging.Logger:
    """Attach handlers to the package logger and return it.

    Calling this again replaces the handlers of the previous call.

    Args:
        level: Threshold for the package logger and its handlers
        log_file: Optional path that receives a copy of every record
    """
    logger = logging.getLogger("scenekit")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to stderr%s", f" and {log_file}" if log_file else "")
    return logger
