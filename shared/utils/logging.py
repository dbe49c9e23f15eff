"""
Logging setup

Replaces loguru's default sink with the project format, optionally adding
a rotating file sink.
"""
import sys
from typing import Optional

from loguru import logger


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "1 day"
) -> None:
    """
    Configure loguru sinks

    Args:
        level: Minimum level for all sinks
        log_file: Optional path of a file sink
        rotation: Rotation policy for the file sink
    """
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())

    if log_file:
        logger.add(log_file, format=LOG_FORMAT, level=level.upper(), rotation=rotation)


def configure_from_settings(settings) -> None:
    """Configure logging from shared.config.settings.Settings"""
    configure_logging(level=settings.log_level, log_file=settings.log_file)
