"""
Logging setup shared by every planner component.
"""
import logging

from .config import config

LOG_FORMAT = "%(asctime)s - {name} - %(levelname)s - %(message)s"


def setup_logging(service_name: str, log_level: str | None = None) -> logging.Logger:
    """
    Return the named logger, attaching a stream handler on first use.

    Args:
        service_name: Component name shown in every record
        log_level: Overrides the configured ``log_level`` (LOG_LEVEL)

    Returns:
        Configured logger instance
    """
    level_name = (log_level or config.get("log_level", "INFO")).upper()
    logger = logging.getLogger(service_name)
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT.format(name=service_name)))
        logger.addHandler(handler)

    return logger
