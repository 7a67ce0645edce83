"""Logging utilities for qpw modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.

    Loggers propagate to the root logger, so ``basicConfig()`` is enough
    to see qpw output. When the root logger has no handlers yet, the
    logger defaults to WARNING so lookups stay quiet.

    Args:
        name: Logger name (e.g. 'qpw.api')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger
