"""
Base exception class for fmd.

Every error raised on purpose by the package derives from FmdError so
callers embedding the engine can catch the whole family at one seam.
"""

from typing import Optional


class FmdError(Exception):
    """Base exception for all fmd errors."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception
