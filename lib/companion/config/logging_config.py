"""
Logging Configuration
=====================
Consistent JSON logging across all provider modules.
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger


def setup_logger(
    name: str = "companion",
    level: Optional[str] = None,
) -> logging.Logger:
    """
    Create and configure a logger instance with JSON output.

    Args:
        name: Logger name (usually __name__ of calling module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
               Defaults to LOG_LEVEL env var or INFO

    Returns:
        Configured logger instance
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    numeric_level = getattr(logging, level, logging.INFO)

    logger = logging.getLogger(name)

    # Only add handler if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = jsonlogger.JsonFormatter(
            '%(asctime)s %(levelname)s %(name)s %(message)s',
            datefmt="%Y-%m-%dT%H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(numeric_level)

    return logger


def set_level(level: str, prefix: str = "companion") -> None:
    """
    Apply a logging level to every existing logger under a prefix.

    Module loggers are created at import time from LOG_LEVEL; this lets
    explicit settings override them afterwards.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    for name, logger in logging.Logger.manager.loggerDict.items():
        if not isinstance(logger, logging.Logger):
            continue
        if name == prefix or name.startswith(prefix + "."):
            logger.setLevel(numeric_level)
