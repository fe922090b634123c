"""
Per-file extraction exceptions for fmd.

An ExtractError is isolated to the candidate that produced it: the runner
records it as a warning, treats the file as non-matching and moves on.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .system_exceptions import FmdError


class ExtractFailure(Enum):
    """Why metadata could not be extracted from a file."""
    UNREADABLE = "unreadable"
    MALFORMED = "malformed"
    # Unexpected error raised while evaluating the file
    FAILED = "failed"


class ExtractError(FmdError):
    """Base exception for metadata extraction failures.

    Attributes:
        path: File the failure belongs to
        reason: Failure category
        cause: Underlying exception, if any
    """

    reason: ExtractFailure = ExtractFailure.UNREADABLE

    def __init__(
        self,
        message: str,
        path: Union[str, Path],
        cause: Optional[Exception] = None
    ) -> None:
        super().__init__(message, original_exception=cause)
        self.path = Path(path)
        self.cause = cause

    def __str__(self) -> str:
        msg = f"{self.path}: {self.message}"
        if self.cause is not None:
            msg += f" ({self.cause})"
        return msg


class UnreadableFileError(ExtractError):
    """Exception raised when a file cannot be opened, read or decoded."""
    reason = ExtractFailure.UNREADABLE


class MalformedMetadataError(ExtractError):
    """Exception raised when a metadata block cannot be delimited."""
    reason = ExtractFailure.MALFORMED
