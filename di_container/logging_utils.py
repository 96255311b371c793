"""Logging setup for di-container."""

import sys
from typing import Optional

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(
    level: str = "WARNING",
    format: Optional[str] = None,
    backtrace: bool = False,
    diagnose: bool = False,
) -> int:
    """
    Configure loguru logging with standardized settings.

    Also enables the records di-container emits, which are disabled on import.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Custom log format string (uses default if None)
        backtrace: Whether to show full traceback on errors
        diagnose: Whether to show variable values in tracebacks

    Returns:
        The id of the installed handler
    """
    # Remove default handler
    logger.remove()
    logger.enable("di_container")

    return logger.add(
        sys.stderr,
        format=format or DEFAULT_FORMAT,
        level=level.upper(),
        backtrace=backtrace,
        diagnose=diagnose,
    )
