"""
Configuration file paths and constants for fmd.

This module provides the ConfigPaths dataclass containing the default
file names used by the configuration system.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class ConfigPaths:
    """Configuration file paths and constants."""

    DEFAULT_CONFIG_FILE: str = "fmd.config.json"
    ENV_FILE: str = ".env"
    SCHEMA_FILE: Path = Path(__file__).parent / "config_schema.json"
