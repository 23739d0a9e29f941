"""
Shared logger utility for the storefront variant resolution project.
Provides a consistent logger configuration for long-lived components.
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Returns a logger with the specified name, configured with the shared
    format. The stream handler is attached once per logger name.
    If no name is provided, returns the root logger.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
