"""
Frontmatter Block Reading Module

Reads the metadata block of a markdown document: either the YAML-style
frontmatter between two ``---`` delimiter lines at the very top of the file,
or the first N lines of the file when no frontmatter is present.

Reading is line by line from a scoped file handle so that, outside of
full-text mode, a large document is never read past its metadata boundary.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, List, Tuple, Union

from ...exceptions.extraction_exceptions import (
    MalformedMetadataError,
    UnreadableFileError,
)

logger = logging.getLogger(__name__)

# Enough for typical frontmatter plus a few lines of inline metadata
DEFAULT_HEAD_LINES = 10

# An open frontmatter block longer than this is rejected
MAX_FRONTMATTER_LINES = 1000

DELIMITER = "---"


def is_delimiter(line: str) -> bool:
    """True if ``line`` consists solely of ``---`` and optional trailing whitespace."""
    return line.rstrip() == DELIMITER


@dataclass(frozen=True)
class MetadataBlock:
    """Raw text considered metadata for one file.

    Attributes:
        has_frontmatter: True if a closed ``---`` block opened the file
        lines: Frontmatter lines (delimiters excluded) or the head lines
        body: Lines past the closing delimiter, only read in full-text mode
        lines_read: Number of physical lines consumed from the source
    """
    has_frontmatter: bool
    lines: Tuple[str, ...] = ()
    body: Tuple[str, ...] = ()
    lines_read: int = 0

    @property
    def content_lines(self) -> Tuple[str, ...]:
        """Every line read, block first, in file order."""
        return self.lines + self.body


def _chomp(line: str) -> str:
    return line.rstrip("\r\n")


class FrontmatterReader:
    """Reader for the metadata block at the top of a document.

    Frontmatter is recognised only when the very first line is a delimiter
    line. The head limit bounds reading for files without frontmatter; an
    open frontmatter block is read to its closing delimiter regardless of
    the head limit, up to ``max_frontmatter_lines``.
    """

    def __init__(self, max_frontmatter_lines: int = MAX_FRONTMATTER_LINES):
        self.max_frontmatter_lines = max_frontmatter_lines

    def read(
        self,
        path: Union[str, Path],
        head_limit: int = DEFAULT_HEAD_LINES,
        full_text: bool = False
    ) -> MetadataBlock:
        """Read the metadata block of the file at ``path``.

        Args:
            path: File to read
            head_limit: Lines to scan when the file has no frontmatter
            full_text: Read the entire file instead of stopping at the block

        Returns:
            MetadataBlock for the file

        Raises:
            UnreadableFileError: If the file cannot be opened, read or decoded
            MalformedMetadataError: If frontmatter stays open too long
        """
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return self.read_stream(handle, path, head_limit, full_text)
        except UnicodeDecodeError as e:
            raise UnreadableFileError("file is not valid UTF-8 text", path, e) from e
        except OSError as e:
            raise UnreadableFileError("failed to read file", path, e) from e

    def read_stream(
        self,
        stream: IO[str],
        path: Union[str, Path],
        head_limit: int = DEFAULT_HEAD_LINES,
        full_text: bool = False
    ) -> MetadataBlock:
        """Read the metadata block from an already open text stream."""
        first = stream.readline()
        if not first:
            return MetadataBlock(has_frontmatter=False)

        first = first.lstrip("\ufeff")
        if is_delimiter(first):
            return self._read_frontmatter(stream, path, first, head_limit, full_text)

        lines = [_chomp(first)]
        if full_text:
            lines.extend(_chomp(line) for line in stream)
        else:
            while len(lines) < head_limit:
                line = stream.readline()
                if not line:
                    break
                lines.append(_chomp(line))

        return MetadataBlock(
            has_frontmatter=False,
            lines=tuple(lines),
            lines_read=len(lines)
        )

    def _read_frontmatter(
        self,
        stream: IO[str],
        path: Union[str, Path],
        opening: str,
        head_limit: int,
        full_text: bool
    ) -> MetadataBlock:
        block: List[str] = []
        for line in stream:
            if is_delimiter(line):
                body: Tuple[str, ...] = ()
                if full_text:
                    body = tuple(_chomp(rest) for rest in stream)
                return MetadataBlock(
                    has_frontmatter=True,
                    lines=tuple(block),
                    body=body,
                    lines_read=len(block) + 2 + len(body)
                )

            block.append(_chomp(line))
            if len(block) > self.max_frontmatter_lines:
                raise MalformedMetadataError(
                    f"frontmatter exceeds maximum size ({self.max_frontmatter_lines} lines)",
                    path
                )

        # No closing delimiter before EOF: the opening line was not frontmatter
        logger.debug(f"Unclosed frontmatter delimiter in {path}, scanning as plain text")
        lines = [_chomp(opening)] + block
        if not full_text:
            lines = lines[:head_limit]
        return MetadataBlock(
            has_frontmatter=False,
            lines=tuple(lines),
            lines_read=len(block) + 1
        )
