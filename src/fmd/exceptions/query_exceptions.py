"""
Query construction exceptions for fmd.

These are usage errors: they are detected while the Query is built, before
any directory is walked or file opened, and are fatal to the whole run.
"""

from typing import Optional

from .system_exceptions import FmdError


class FilterValidationError(FmdError):
    """Exception raised when a filter specification is rejected."""

    def __init__(self, message: str, filter_spec: Optional[str] = None) -> None:
        super().__init__(message)
        self.filter_spec = filter_spec


class UnknownFilterError(FilterValidationError):
    """Exception raised for a filter kind that does not exist."""
    pass


class InvalidPatternError(FilterValidationError):
    """Exception raised when a regular expression fails to compile."""

    def __init__(self, message: str, filter_spec: Optional[str] = None, pattern: Optional[str] = None) -> None:
        super().__init__(message, filter_spec)
        self.pattern = pattern


class InvalidFieldFilterError(FilterValidationError):
    """Exception raised for a field filter not of the form ``key:pattern``."""
    pass


class InvalidDateError(FilterValidationError):
    """Exception raised for a date boundary not in ``YYYY-MM-DD`` form."""
    pass
