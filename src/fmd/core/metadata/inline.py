"""
Inline Metadata Parsing Module

Line-oriented parsing of metadata blocks: ``key: value`` fields, inline
``[a, b]`` flow lists, bulleted block lists, ``#hashtag`` tokens, Markdown
headings and ISO-8601 calendar dates.

The grammar is intentionally partial. It is not a YAML parser: nested maps
are flattened to their leaf keys and quoted multi-line scalars are not
supported. That is enough for the loosely structured metadata people write
at the top of their notes.
"""

import re
from datetime import date
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Set, Tuple

# key: value  (the colon must be followed by whitespace or end of line)
FIELD_PATTERN = re.compile(r'^\s*([^\s:#\-\[\]{}"\'][^:]*?)\s*:(?:\s+(.*?))?\s*$')

# key:value  (identifier key, no space; "scheme://" is not a field)
COMPACT_FIELD_PATTERN = re.compile(r'^\s*([^\W\d][\w-]*):(?!//)(\S.*?)\s*$')

# - item  (optionally indented)
LIST_ITEM_PATTERN = re.compile(r'^\s*-(?:\s+(.*?))?\s*$')

# #tag preceded by start of line, whitespace, "(", "[", "," or ":"
HASHTAG_PATTERN = re.compile(r'(?<![^\s(\[,:])#(\w[\w/-]*)')

# # Heading through ###### Heading, closing hashes dropped
HEADING_PATTERN = re.compile(r'^\s*#{1,6}\s+(.+?)(?:\s+#+)?\s*$')

DATE_PATTERN = re.compile(r'^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$')

TAG_SEPARATORS = re.compile(r'[,\s]+')

QUOTES = ('"', "'")


class FieldEntry(NamedTuple):
    """Values read for one key from a single field line or list item."""
    key: str
    values: List[str]
    is_list: bool


def strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTES:
        return value[1:-1].strip()
    return value


def parse_value(raw: Optional[str]) -> List[str]:
    """Split an inline field value into one or more string values.

    ``[a, "b"]`` yields one value per item; anything else is a single
    value with surrounding quotes removed. Empty values yield nothing.
    """
    if raw is None:
        return []
    raw = raw.strip()
    if not raw:
        return []

    if is_flow_list(raw):
        items = (strip_quotes(item) for item in raw[1:-1].split(","))
        return [item for item in items if item]

    value = strip_quotes(raw)
    return [value] if value else []


def is_flow_list(raw: Optional[str]) -> bool:
    raw = (raw or "").strip()
    return raw.startswith("[") and raw.endswith("]")


def match_field(line: str) -> Optional[Tuple[str, Optional[str]]]:
    """Split a ``key: value`` or ``key:value`` line into key and raw value.

    Returns None for lines that are not fields.
    """
    match = FIELD_PATTERN.match(line) or COMPACT_FIELD_PATTERN.match(line)
    if not match:
        return None
    return match.group(1).strip().casefold(), match.group(2)


def iter_field_entries(lines: Iterable[str]) -> Iterator[FieldEntry]:
    """Yield one FieldEntry per field line or block-list item.

    A key with no inline value yields an empty list entry and then one entry
    per bullet item that follows it; blank lines do not end the list, any
    other line does.
    """
    list_key: Optional[str] = None

    for line in lines:
        if list_key is not None:
            item = LIST_ITEM_PATTERN.match(line)
            if item:
                value = strip_quotes(item.group(1) or "")
                if value:
                    yield FieldEntry(list_key, [value], is_list=True)
                continue
            if not line.strip():
                continue
            list_key = None

        field = match_field(line)
        if field is None:
            continue

        key, raw = field
        if raw:
            yield FieldEntry(key, parse_value(raw), is_list=is_flow_list(raw))
        else:
            list_key = key
            yield FieldEntry(key, [], is_list=True)


def parse_fields(lines: Iterable[str]) -> Dict[str, List[str]]:
    """Parse ``key: value`` and block-list fields from metadata lines.

    Keys are case-folded. A key seen more than once accumulates values.

    Args:
        lines: Lines of the metadata block

    Returns:
        Mapping from case-folded key to its values, in file order
    """
    fields: Dict[str, List[str]] = {}
    for entry in iter_field_entries(lines):
        fields.setdefault(entry.key, []).extend(entry.values)
    return fields


def extract_hashtags(lines: Iterable[str]) -> Set[str]:
    """Collect case-folded ``#tag`` tokens, without the leading ``#``."""
    tags: Set[str] = set()
    for line in lines:
        if "#" not in line:
            continue
        tags.update(tag.casefold() for tag in HASHTAG_PATTERN.findall(line))
    return tags


def normalise_tag(value: str) -> str:
    return value.strip().lstrip("#").strip().casefold()


def split_tag_values(values: Iterable[str]) -> Set[str]:
    """Normalise inline ``tags`` scalars into a set of case-folded tags.

    Each value may hold several tags separated by commas or whitespace,
    and each tag may carry a leading ``#``.
    """
    tags: Set[str] = set()
    for value in values:
        for token in TAG_SEPARATORS.split(value):
            token = normalise_tag(token)
            if token:
                tags.add(token)
    return tags


def extract_field_tags(lines: Iterable[str], keys: Iterable[str]) -> Set[str]:
    """Collect tags from the ``keys`` fields of metadata lines.

    Items of a ``[a, b]`` flow list or a bulleted block list are one tag
    each, so ``[machine learning]`` is the single tag ``machine learning``.
    A bare scalar such as ``#a #b`` or ``a, b`` is split into several.
    """
    keys = set(keys)
    tags: Set[str] = set()
    for entry in iter_field_entries(lines):
        if entry.key not in keys:
            continue
        if entry.is_list:
            tags.update(tag for tag in map(normalise_tag, entry.values) if tag)
        else:
            tags |= split_tag_values(entry.values)
    return tags


def find_heading(lines: Iterable[str]) -> Optional[str]:
    """Return the text of the first level 1-6 Markdown heading."""
    for line in lines:
        match = HEADING_PATTERN.match(line)
        if match:
            return match.group(1)
    return None


def parse_iso_date(value: str) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` date, tolerating a trailing time part.

    Returns None for anything that is not a valid calendar date.
    """
    match = DATE_PATTERN.match(value.strip())
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None
