"""Loguru sink configuration shared by the CLI and the watcher."""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> [<level>{level: >5}</level>] :: "
    "[<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>]: "
    "<level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """
    Replace loguru's default sink with a timestamped stdout sink.

    Raises:
        ValueError: if ``level`` is not a known loguru level; the existing
            sinks are left in place
    """
    level = level.upper()
    logger.level(level)
    logger.remove()
    logger.add(sys.stdout, format=LOG_FORMAT, level=level)
