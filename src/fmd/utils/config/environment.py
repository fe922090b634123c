"""
Environment variable handling for configuration management.

Maps ``FMD_*`` environment variables onto configuration keys and converts
their string values to the types the configuration schema expects.
"""

import logging
import os
from copy import deepcopy
from typing import Any, Dict, Optional, Tuple

from ...exceptions.config_exceptions import EnvironmentVariableError


logger = logging.getLogger(__name__)

# Environment variable -> (configuration key, target type)
ENV_MAPPING: Dict[str, Tuple[str, str]] = {
    "FMD_HEAD_LINES": ("head_lines", "integer"),
    "FMD_FULL_TEXT": ("full_text", "boolean"),
    "FMD_GLOB": ("glob", "string"),
    "FMD_MAX_DEPTH": ("max_depth", "integer"),
    "FMD_WORKERS": ("workers", "integer"),
    "FMD_LOG_LEVEL": ("logging.level", "string"),
    "FMD_LOG_FORMAT": ("logging.format", "string"),
}

TRUE_VALUES = ("true", "1", "yes", "on", "enabled")
FALSE_VALUES = ("false", "0", "no", "off", "disabled")


class EnvironmentHandler:
    """
    Environment variable handling for configuration management.

    Handles environment variable overrides and type conversion.
    """

    def __init__(self, environ: Optional[Dict[str, str]] = None) -> None:
        """
        Initialize environment handler.

        Args:
            environ: Environment to read (default: ``os.environ``)
        """
        self.environ = os.environ if environ is None else environ

    def get_env_mapping(self) -> Dict[str, Tuple[str, str]]:
        """Mapping of environment variable names to (config key, type)."""
        return dict(ENV_MAPPING)

    def convert_env_value(self, value: str, target_type: str = "string", variable_name: Optional[str] = None) -> Any:
        """
        Convert an environment variable string to the target type.

        Args:
            value: Environment variable value
            target_type: One of 'string', 'boolean', 'integer'
            variable_name: Variable name for error reporting

        Returns:
            Converted value; an empty value converts to None

        Raises:
            EnvironmentVariableError: If conversion fails
        """
        value = value.strip()
        if not value:
            return None

        if target_type == "boolean":
            lowered = value.lower()
            if lowered in TRUE_VALUES:
                return True
            if lowered in FALSE_VALUES:
                return False
            raise EnvironmentVariableError(
                f"Failed to convert {variable_name or 'environment value'}='{value}' to boolean",
                variable_name
            )
        if target_type == "integer":
            try:
                return int(value)
            except ValueError as e:
                raise EnvironmentVariableError(
                    f"Failed to convert {variable_name or 'environment value'}='{value}' to integer",
                    variable_name
                ) from e
        return value

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Args:
            config: Base configuration dictionary

        Returns:
            Copy of the configuration with overrides applied

        Raises:
            EnvironmentVariableError: If an override cannot be converted
        """
        result = deepcopy(config)

        for env_var, (config_key, target_type) in self.get_env_mapping().items():
            env_value = self.environ.get(env_var)
            if env_value is None:
                continue

            converted_value = self.convert_env_value(env_value, target_type, env_var)
            if converted_value is None:
                continue
            self._set_nested_value(result, config_key, converted_value)
            logger.debug(f"Applied environment override: {env_var} -> {config_key}")

        return result

    def _set_nested_value(self, config: Dict[str, Any], key_path: str, value: Any) -> None:
        keys = key_path.split(".")
        current = config
        for key in keys[:-1]:
            current = current.setdefault(key, {})
        current[keys[-1]] = value
