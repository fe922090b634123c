"""
Metadata Types Module

Core data structure and main extractor for metadata processing.
Provides the primary interface for turning one file into an
ExtractedMetadata record.
"""

import io
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

from .frontmatter import DEFAULT_HEAD_LINES, FrontmatterReader, MetadataBlock
from .inline import (
    extract_field_tags,
    extract_hashtags,
    find_heading,
    parse_fields,
    parse_iso_date,
)

logger = logging.getLogger(__name__)

# Well-known date fields, in resolution order
DATE_FIELDS: Tuple[str, ...] = ("date", "created", "updated", "modified")

TAG_FIELDS: Tuple[str, ...] = ("tags", "tag")


@dataclass(frozen=True)
class ExtractedMetadata:
    """Read-only metadata view for one document.

    Attributes:
        path: File the metadata was read from
        has_frontmatter: True if the file opened with a frontmatter block
        tags: Case-folded tags without a leading ``#``
        title: Title field, or the first heading when there is none
        fields: Case-folded field name to its values
        dates: Parsed date per well-known field, in resolution order
        lines_read: Physical lines read from the file
    """
    path: Path
    has_frontmatter: bool = False
    tags: FrozenSet[str] = frozenset()
    title: Optional[str] = None
    fields: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    dates: Mapping[str, date] = field(default_factory=lambda: MappingProxyType({}))
    lines_read: int = 0

    def get_field(self, key: str) -> Tuple[str, ...]:
        """Values of ``key`` (case-insensitive), empty if absent."""
        return self.fields.get(key.casefold(), ())

    def has_tag(self, tag: str) -> bool:
        """Check if the document carries ``tag`` (case-insensitive)."""
        return tag.casefold() in self.tags

    @property
    def author(self) -> Tuple[str, ...]:
        return self.get_field("author")

    def date_candidates(self) -> List[date]:
        """Parsed dates in the fixed ``date, created, updated, modified`` order."""
        return [self.dates[name] for name in DATE_FIELDS if name in self.dates]


class MetadataExtractor:
    """Main class for extracting metadata from a document.

    Combines the frontmatter reader with the inline field grammar:

    - structured fields come from the frontmatter block when there is one,
      otherwise from the head lines (or the whole file in full-text mode);
    - tags come from ``tags``/``tag`` field values plus ``#hashtags`` in the
      block, and in full-text mode from the rest of the file too;
    - the title is the ``title`` field or the first Markdown heading;
    - a date per well-known field is the first value that parses.
    """

    def __init__(self, reader: Optional[FrontmatterReader] = None):
        self.reader = reader or FrontmatterReader()

    def extract(
        self,
        path: Union[str, Path],
        head_limit: int = DEFAULT_HEAD_LINES,
        full_text: bool = False
    ) -> ExtractedMetadata:
        """Extract metadata from the file at ``path``.

        Args:
            path: File to read
            head_limit: Lines to scan when the file has no frontmatter
            full_text: Scan the entire file for tags and headings

        Returns:
            ExtractedMetadata for the file

        Raises:
            ExtractError: If the file cannot be read or its block delimited
        """
        block = self.reader.read(path, head_limit, full_text)
        return self.build(block, path)

    def extract_text(
        self,
        content: str,
        path: Union[str, Path] = "<memory>",
        head_limit: int = DEFAULT_HEAD_LINES,
        full_text: bool = False
    ) -> ExtractedMetadata:
        """Extract metadata from in-memory document text."""
        block = self.reader.read_stream(io.StringIO(content), path, head_limit, full_text)
        return self.build(block, path)

    def build(self, block: MetadataBlock, path: Union[str, Path]) -> ExtractedMetadata:
        """Derive the metadata record from a block that has already been read."""
        parsed = parse_fields(block.lines)

        tags = extract_field_tags(block.lines, TAG_FIELDS)
        tags |= extract_hashtags(block.content_lines)

        title = None
        title_values = parsed.get("title")
        if title_values and title_values[0].strip():
            title = title_values[0].strip()
        else:
            title = find_heading(block.content_lines)

        dates: Dict[str, date] = {}
        for name in DATE_FIELDS:
            for value in parsed.get(name, ()):
                parsed_date = parse_iso_date(value)
                if parsed_date is not None:
                    dates[name] = parsed_date
                    break
            else:
                if name in parsed:
                    logger.debug(f"No parsable date in field '{name}' of {path}")

        return ExtractedMetadata(
            path=Path(path),
            has_frontmatter=block.has_frontmatter,
            tags=frozenset(tags),
            title=title,
            fields=MappingProxyType({key: tuple(values) for key, values in parsed.items()}),
            dates=MappingProxyType(dates),
            lines_read=block.lines_read
        )


_default_extractor = MetadataExtractor()


def extract(
    path: Union[str, Path],
    head_limit: int = DEFAULT_HEAD_LINES,
    full_text: bool = False
) -> ExtractedMetadata:
    """Extract metadata from ``path`` with the default extractor."""
    return _default_extractor.extract(path, head_limit, full_text)
