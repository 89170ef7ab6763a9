"""
Console log - Tagged log lines for the critter world.

Every module logs through `get_logger(tag)`, which hangs off the package
logger, so a single `configure_logging()` call controls the whole console:

    [Lizard] Spawned L001: 4 legs, tail 17, size 6.00
    [Visualization] Initialized (1280x800 @ 60 fps)
"""

import logging
import sys

ROOT_LOGGER = 'critter_world'


class TagFormatter(logging.Formatter):
    """Formats records as `[Tag] message` using the last logger name part."""

    def format(self, record: logging.LogRecord) -> str:
        record.tag = record.name.rsplit('.', 1)[-1]
        return super().format(record)


def get_logger(tag: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{tag}")


def configure_logging(level: str = 'INFO', stream=None) -> logging.Logger:
    """
    Attach the tagged console handler to the package logger.

    Calling again only changes the level; the handler is installed once.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    if not any(isinstance(h.formatter, TagFormatter) for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(TagFormatter('[%(tag)s] %(message)s'))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
