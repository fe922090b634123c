"""Utility modules for fmd: configuration and logging setup."""

from .config import ConfigManager, FmdSettings
from .logging_config import JSONFormatter, LogFormat, setup_logging

__all__ = [
    'ConfigManager',
    'FmdSettings',
    'JSONFormatter',
    'LogFormat',
    'setup_logging',
]
