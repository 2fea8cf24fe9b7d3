"""
Centralized configuration management for Token Ledger.

Usage:
    from config import get_config

    config = get_config()  # Auto-detects environment
    # or
    config = get_config('testing')  # Explicit environment

    print(config.database.url)
    print(config.logging.retention_days)
"""

from config.base import BaseConfig
from config.development import DevelopmentConfig
from config.production import ProductionConfig
from config.testing import TestingConfig

import os


def get_config(environment: str = None) -> BaseConfig:
    """
    Get configuration instance based on environment.

    Args:
        environment: Environment name ('development', 'production', 'testing')
                    If None, auto-detects from TOKEN_LEDGER_ENV environment variable

    Returns:
        Configuration instance for the specified environment
    """
    if environment is None:
        environment = os.getenv('TOKEN_LEDGER_ENV', 'development').lower()

    config_map = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'testing': TestingConfig,
        'dev': DevelopmentConfig,
        'prod': ProductionConfig,
        'test': TestingConfig,
    }

    config_class = config_map.get(environment.lower(), DevelopmentConfig)
    config = config_class()
    config.environment = environment.lower()
    return config


__all__ = [
    'BaseConfig',
    'DevelopmentConfig',
    'ProductionConfig',
    'TestingConfig',
    'get_config',
]
