"""Configuration management package.

This package provides the fmd configuration system with support for:
- JSON schema validation
- Environment variable and .env overrides
- Default value resolution

Usage:
    from fmd.utils.config import ConfigManager

    config = ConfigManager()
    head_lines = config.get("head_lines", 10)
"""

from .manager import DEFAULT_CONFIG, ConfigManager, FmdSettings, deep_merge
from .paths import ConfigPaths
from .file_operations import FileOperations
from .schema_validation import SchemaValidator
from .environment import ENV_MAPPING, EnvironmentHandler

__all__ = [
    'ConfigManager',
    'ConfigPaths',
    'DEFAULT_CONFIG',
    'ENV_MAPPING',
    'EnvironmentHandler',
    'FileOperations',
    'FmdSettings',
    'SchemaValidator',
    'deep_merge',
]
