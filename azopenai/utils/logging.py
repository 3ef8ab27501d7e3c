"""
Logging utilities for azopenai.

The package disables its loguru logger on import. Applications that want
its output call ``enable_logging``.

Date: 2026-10-18
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def _only_azopenai(record: dict) -> bool:
    return record["name"].startswith("azopenai")


def enable_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    format: Optional[str] = None,
) -> list[int]:
    """
    Turn on azopenai log output.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file
        rotation: Log rotation size/time
        retention: Log retention period
        format: Log format string

    Returns:
        Ids of the sinks added, for ``logger.remove``
    """
    logger.enable("azopenai")
    format = format or DEFAULT_FORMAT

    handler_ids = [
        logger.add(
            sys.stderr,
            format=format,
            level=level,
            colorize=True,
            filter=_only_azopenai,
        )
    ]

    if log_file:
        handler_ids.append(
            logger.add(
                log_file,
                format=format,
                level=level,
                rotation=rotation,
                retention=retention,
                compression="zip",
                filter=_only_azopenai,
            )
        )

    return handler_ids


def disable_logging() -> None:
    """Silence azopenai log output again."""
    logger.disable("azopenai")
