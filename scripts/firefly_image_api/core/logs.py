"""Logging setup for Firefly Forge."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER = "firefly_image_api"

_PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s %(message)s"


class ColourFormatter(logging.Formatter):
    LEVEL_COLOURS = [
        (logging.DEBUG, "\x1b[40;1m"),
        (logging.INFO, "\x1b[34;1m"),
        (logging.WARNING, "\x1b[33;1m"),
        (logging.ERROR, "\x1b[31m"),
        (logging.CRITICAL, "\x1b[41m"),
    ]

    FORMATS = {
        level: logging.Formatter(
            f"\x1b[30;1m%(asctime)s\x1b[0m {colour}%(levelname)-8s\x1b[0m "
            f"\x1b[35m%(name)s\x1b[0m %(message)s",
            "%H:%M:%S",
        )
        for level, colour in LEVEL_COLOURS
    }

    def format(self, record: logging.LogRecord) -> str:
        formatter = self.FORMATS.get(record.levelno, self.FORMATS[logging.DEBUG])
        return formatter.format(record)


def setup_logging(level: Union[str, int] = "INFO", color: Optional[bool] = None) -> logging.Logger:
    """Attach one stderr handler to the package logger, replacing any previous one."""
    if color is None:
        color = sys.stderr.isatty()
    handler = logging.StreamHandler(sys.stderr)
    if color:
        handler.setFormatter(ColourFormatter())
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, "%Y-%m-%d %H:%M:%S"))

    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False
    return logger
