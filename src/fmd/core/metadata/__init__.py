"""
Metadata Extraction Module

This module provides metadata extraction from markdown documents:
frontmatter block reading, inline field parsing and the combined
ExtractedMetadata record consumed by the query predicates.

Components:
- frontmatter: ``---`` block detection and bounded reading
- inline: Line-oriented field grammar, hashtags, headings, dates
- types: ExtractedMetadata and the MetadataExtractor
"""

from .frontmatter import (
    DEFAULT_HEAD_LINES,
    MAX_FRONTMATTER_LINES,
    FrontmatterReader,
    MetadataBlock,
    is_delimiter,
)

from .inline import (
    extract_field_tags,
    extract_hashtags,
    find_heading,
    parse_fields,
    parse_iso_date,
    split_tag_values,
)

from .types import (
    DATE_FIELDS,
    ExtractedMetadata,
    MetadataExtractor,
    extract,
)

__all__ = [
    # Block reading
    'DEFAULT_HEAD_LINES',
    'MAX_FRONTMATTER_LINES',
    'FrontmatterReader',
    'MetadataBlock',
    'is_delimiter',

    # Inline grammar
    'extract_field_tags',
    'extract_hashtags',
    'find_heading',
    'parse_fields',
    'parse_iso_date',
    'split_tag_values',

    # Core types
    'DATE_FIELDS',
    'ExtractedMetadata',
    'MetadataExtractor',
    'extract',
]
