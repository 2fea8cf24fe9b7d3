"""
Logging configuration for Token Ledger.

This module provides a centralized configuration for all process loggers.
It allows setting different log levels for different components; the
database log and audit trail are written separately by DatabaseLogger and
fall back to these loggers when the database is unreachable.
"""

import os
import logging
from typing import Dict

from shared.constants import FALLBACK_LOGGER_NAME

_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def _component_levels() -> Dict[str, str]:
    return {
        # Application loggers
        "repositories": os.getenv("LOG_LEVEL_REPOSITORIES", "INFO").upper(),
        "services": os.getenv("LOG_LEVEL_SERVICES", "INFO").upper(),
        FALLBACK_LOGGER_NAME: os.getenv("LOG_LEVEL_FALLBACK", "INFO").upper(),

        # Third-party loggers - keep quiet unless asked
        "sqlalchemy.engine": os.getenv("LOG_LEVEL_SQL", "WARNING").upper(),
        "uvicorn.access": os.getenv("LOG_LEVEL_ACCESS", "INFO").upper(),
        "passlib": "ERROR",
    }


def configure_logging():
    """Configure logging for the application."""
    # Get log level from environment variable
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    # Configure root logger
    logging.basicConfig(level=log_level, format=_FORMAT)

    # Apply configuration to loggers
    for logger_name, level_name in _component_levels().items():
        logger = logging.getLogger(logger_name)
        logger.setLevel(getattr(logging, level_name, log_level))


def get_logger_levels() -> Dict[str, str]:
    """Get current log levels for all configured loggers."""
    result = {"root": logging.getLevelName(logging.getLogger().level)}

    for logger_name in _component_levels():
        logger = logging.getLogger(logger_name)
        result[logger_name] = logging.getLevelName(logger.level)

    return result
