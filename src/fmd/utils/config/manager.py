"""
Main configuration manager for fmd.

This module provides the ConfigManager class that merges built-in defaults,
an optional JSON configuration file and environment variable overrides,
and validates the result against the bundled schema.
"""

import logging
import os
from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...core.metadata.frontmatter import DEFAULT_HEAD_LINES
from ...core.walker import DEFAULT_GLOB, EXCLUDED_DIRS
from .environment import EnvironmentHandler
from .file_operations import FileOperations
from .paths import ConfigPaths
from .schema_validation import SchemaValidator


logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "head_lines": DEFAULT_HEAD_LINES,
    "full_text": False,
    "glob": DEFAULT_GLOB,
    "max_depth": None,
    "workers": None,
    "null_separator": False,
    "ignore_case": False,
    "excluded_dirs": sorted(EXCLUDED_DIRS),
    "logging": {
        "level": "WARNING",
        "format": "standard",
        "file": None,
    },
}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    result = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)
    return result


@dataclass(frozen=True)
class FmdSettings:
    """Typed view of the resolved configuration."""
    head_lines: int = DEFAULT_HEAD_LINES
    full_text: bool = False
    glob: str = DEFAULT_GLOB
    max_depth: Optional[int] = None
    workers: Optional[int] = None
    null_separator: bool = False
    ignore_case: bool = False
    excluded_dirs: List[str] = field(default_factory=lambda: sorted(EXCLUDED_DIRS))
    log_level: str = "WARNING"
    log_format: str = "standard"
    log_file: Optional[str] = None


class ConfigManager:
    """
    Configuration manager for fmd.

    Handles loading, validation, and merging of configuration from:
    - Built-in defaults
    - A JSON configuration file (``fmd.config.json`` unless given explicitly)
    - ``FMD_*`` environment variables, including those set in ``.env``

    A missing default configuration file is not an error; a missing
    explicitly requested one is.
    """

    def __init__(
        self,
        config_file: Optional[Union[str, Path]] = None,
        project_root: Optional[Union[str, Path]] = None,
        load_env: bool = True,
        environ: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize the ConfigManager.

        Args:
            config_file: Path to configuration file (default: fmd.config.json)
            project_root: Directory relative paths resolve against (default: cwd)
            load_env: Whether to load environment variables from .env file
            environ: Environment mapping for overrides (default: os.environ)
        """
        self.project_root = Path(project_root or os.getcwd()).resolve()
        self.paths = ConfigPaths()
        self.explicit_config = config_file is not None
        self.config_file = str(config_file) if config_file is not None else self.paths.DEFAULT_CONFIG_FILE

        self._config: Dict[str, Any] = {}
        self._loaded = False

        self.file_ops = FileOperations(self.project_root, self.paths.ENV_FILE)
        self.schema_validator = SchemaValidator(self.file_ops, self.paths)

        if load_env:
            self.file_ops.load_environment_variables()
        self.env_handler = EnvironmentHandler(environ)

    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration. Loads if not already loaded."""
        if not self._loaded:
            self.load_config()
        return deepcopy(self._config)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load_config(self, force_reload: bool = False) -> Dict[str, Any]:
        """
        Load configuration from all sources.

        Args:
            force_reload: Force reloading even if already loaded

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigurationFileNotFoundError: If an explicit config file is missing
            ConfigurationValidationError: If the merged configuration is invalid
            ConfigurationError: If loading fails otherwise
        """
        if self._loaded and not force_reload:
            return deepcopy(self._config)

        config_path = self.file_ops.resolve_path(self.config_file)
        file_config: Dict[str, Any] = {}
        if self.explicit_config or config_path.is_file():
            file_config = self.file_ops.load_json_file(config_path)
        else:
            logger.debug(f"No configuration file at {config_path}, using defaults")

        # File values are validated on their own so errors point at the file
        self.schema_validator.validate_config(file_config, config_file=str(config_path))

        merged = deep_merge(DEFAULT_CONFIG, file_config)
        merged = self.env_handler.apply_environment_overrides(merged)
        self.schema_validator.validate_config(merged, config_file=str(config_path))

        self._config = merged
        self._loaded = True
        logger.debug("Configuration loaded successfully")
        return deepcopy(self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key using dot notation.

        Args:
            key: Configuration key (supports dot notation like 'logging.level')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        config = self.config
        try:
            for k in key.split("."):
                config = config[k]
            return config
        except (KeyError, TypeError):
            return default

    def settings(self) -> FmdSettings:
        """Typed view of the resolved configuration."""
        config = self.config
        log_config = config.get("logging", {})
        return FmdSettings(
            head_lines=config["head_lines"],
            full_text=config["full_text"],
            glob=config["glob"],
            max_depth=config["max_depth"],
            workers=config["workers"],
            null_separator=config["null_separator"],
            ignore_case=config["ignore_case"],
            excluded_dirs=list(config["excluded_dirs"]),
            log_level=log_config.get("level", "WARNING"),
            log_format=log_config.get("format", "standard"),
            log_file=log_config.get("file"),
        )
