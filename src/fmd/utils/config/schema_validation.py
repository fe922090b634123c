"""
Schema validation for configuration management.

This module loads the bundled JSON schema and validates merged
configuration against it with ``jsonschema``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jsonschema

from ...exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationValidationError,
)
from .file_operations import FileOperations
from .paths import ConfigPaths


logger = logging.getLogger(__name__)


class SchemaValidator:
    """
    Schema validation for configuration management.

    Reports every violation, not just the first, with the dotted path of
    each invalid field.
    """

    def __init__(self, file_ops: FileOperations, paths: ConfigPaths) -> None:
        self.file_ops = file_ops
        self.paths = paths
        self._schema: Optional[Dict[str, Any]] = None

    def load_schema(self, schema_file: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """
        Load the JSON schema used for validation.

        Args:
            schema_file: Path to schema file (default: the bundled schema)

        Returns:
            Loaded JSON schema

        Raises:
            ConfigurationError: If the schema cannot be loaded
        """
        if schema_file is None and self._schema is not None:
            return self._schema

        schema = self.file_ops.load_json_file(schema_file or self.paths.SCHEMA_FILE)
        if schema_file is None:
            self._schema = schema
        return schema

    def validate_config(
        self,
        config: Dict[str, Any],
        schema: Optional[Dict[str, Any]] = None,
        config_file: Optional[str] = None
    ) -> None:
        """
        Validate configuration against the JSON schema.

        Args:
            config: Configuration dictionary to validate
            schema: JSON schema (loads the bundled one if not provided)
            config_file: Configuration file name for error reporting

        Raises:
            ConfigurationValidationError: If validation fails
            ConfigurationError: If the schema itself is invalid
        """
        schema = schema or self.load_schema()

        try:
            validator_cls = jsonschema.validators.validator_for(schema)
            validator_cls.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ConfigurationError(f"Invalid configuration schema: {e.message}") from e

        errors = sorted(
            validator_cls(schema).iter_errors(config),
            key=lambda error: list(error.absolute_path)
        )
        if not errors:
            logger.debug("Configuration passed schema validation")
            return

        validation_errors = []
        invalid_fields = []
        for error in errors:
            field_path = ".".join(str(p) for p in error.absolute_path)
            if field_path:
                invalid_fields.append(field_path)
                validation_errors.append(f"{field_path}: {error.message}")
            else:
                validation_errors.append(error.message)

        raise ConfigurationValidationError(
            f"Configuration validation failed: {errors[0].message}",
            config_file,
            validation_errors,
            invalid_fields
        )
