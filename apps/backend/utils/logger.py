"""Logging configuration for the emissions API."""
import logging

from apps.backend.utils.config import LOG_LEVEL

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(name: str = "apps", level: str | None = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        name: Logger name; modules log through children of it via __name__
        level: Level name, defaults to LOG_LEVEL

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level or LOG_LEVEL)

    # create_app may run more than once per process (tests)
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    return logger
