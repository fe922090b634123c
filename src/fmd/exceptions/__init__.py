"""
Exceptions package for fmd.

This package contains the custom exception classes raised by the metadata
extractor, the query builder and the configuration layer.
"""

from .system_exceptions import FmdError

from .config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    EnvironmentVariableError,
)

from .query_exceptions import (
    FilterValidationError,
    UnknownFilterError,
    InvalidPatternError,
    InvalidFieldFilterError,
    InvalidDateError,
)

from .extraction_exceptions import (
    ExtractFailure,
    ExtractError,
    UnreadableFileError,
    MalformedMetadataError,
)

__all__ = [
    "FmdError",
    # Configuration
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "EnvironmentVariableError",
    # Usage errors
    "FilterValidationError",
    "UnknownFilterError",
    "InvalidPatternError",
    "InvalidFieldFilterError",
    "InvalidDateError",
    # Per-file errors
    "ExtractFailure",
    "ExtractError",
    "UnreadableFileError",
    "MalformedMetadataError",
]
