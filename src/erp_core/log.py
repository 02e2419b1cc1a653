"""
Logging setup.

All modules log through loguru's global ``logger``; this only swaps the
default sink for one at the configured level.
"""

import sys

from loguru import logger

from .errors import ConfigurationError


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> int:
    """
    Replace loguru's default handler with a stderr sink.

    Args:
        level: Minimum level (e.g. "DEBUG", "INFO")

    Returns:
        The id of the installed sink

    Raises:
        ConfigurationError: If loguru does not know the level
    """
    logger.remove()
    try:
        return logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
    except ValueError as e:
        logger.add(sys.stderr, format=LOG_FORMAT)
        raise ConfigurationError(f"Invalid log level {level!r}: {e}") from e
