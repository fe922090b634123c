"""
Predicate library for metadata queries.

Each predicate is an immutable, stateless matcher over one file's
ExtractedMetadata and its path. Predicates share no mutable state, so a
single Query can be evaluated from many worker threads at once.
"""

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import ClassVar, Optional, Pattern

from ..metadata.types import ExtractedMetadata


class PredicateKind(Enum):
    """Predicate types. Same-kind predicates form one OR-group."""
    NAME = "name"
    TAG = "tag"
    TITLE = "title"
    AUTHOR = "author"
    FIELD = "field"
    DATE_AFTER = "date-after"
    DATE_BEFORE = "date-before"
    # Group kind for date-after and date-before bounds; not a filter kind
    DATE = "date"

    @property
    def requires_metadata(self) -> bool:
        """False only for kinds decided from the path alone."""
        return self is not PredicateKind.NAME

    @property
    def is_filter_kind(self) -> bool:
        return self is not PredicateKind.DATE


@dataclass(frozen=True)
class Predicate:
    """Base class for all predicates."""
    kind: ClassVar[PredicateKind]

    def matches(self, metadata: Optional[ExtractedMetadata], path: Path) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class TagPredicate(Predicate):
    """Case-insensitive tag membership; ``#work`` and ``work`` are equivalent."""
    kind: ClassVar[PredicateKind] = PredicateKind.TAG
    pattern: str

    def matches(self, metadata: Optional[ExtractedMetadata], path: Path) -> bool:
        if metadata is None:
            return False
        pattern = self.pattern.strip()
        return any(
            metadata.has_tag(candidate)
            for candidate in (pattern, pattern.lstrip("#"))
        )


@dataclass(frozen=True)
class TitlePredicate(Predicate):
    """Case-insensitive regex search against the resolved title."""
    kind: ClassVar[PredicateKind] = PredicateKind.TITLE
    regex: Pattern[str]

    def matches(self, metadata: Optional[ExtractedMetadata], path: Path) -> bool:
        if metadata is None or metadata.title is None:
            return False
        return self.regex.search(metadata.title) is not None


@dataclass(frozen=True)
class NamePredicate(Predicate):
    """Regex search against the base name; needs no file I/O."""
    kind: ClassVar[PredicateKind] = PredicateKind.NAME
    regex: Pattern[str]

    @property
    def ignore_case(self) -> bool:
        return bool(self.regex.flags & re.IGNORECASE)

    def matches(self, metadata: Optional[ExtractedMetadata], path: Path) -> bool:
        name = Path(path).name
        if not name:
            return False
        return self.regex.search(name) is not None


def _any_value_contains(values, pattern: str) -> bool:
    return any(pattern in value.casefold() for value in values)


@dataclass(frozen=True)
class FieldPredicate(Predicate):
    """Case-insensitive substring match on any value of ``key``.

    ``pattern`` is stored case-folded.
    """
    kind: ClassVar[PredicateKind] = PredicateKind.FIELD
    key: str
    pattern: str

    def matches(self, metadata: Optional[ExtractedMetadata], path: Path) -> bool:
        if metadata is None:
            return False
        return _any_value_contains(metadata.get_field(self.key), self.pattern)


@dataclass(frozen=True)
class AuthorPredicate(Predicate):
    """Case-insensitive substring match on the ``author`` field."""
    kind: ClassVar[PredicateKind] = PredicateKind.AUTHOR
    pattern: str

    def matches(self, metadata: Optional[ExtractedMetadata], path: Path) -> bool:
        if metadata is None:
            return False
        return _any_value_contains(metadata.author, self.pattern)


@dataclass(frozen=True)
class DateRangePredicate(Predicate):
    """True if a single well-known date satisfies every bound.

    ``after`` and ``before`` are inclusive; either may be None. Bounds are
    never satisfied by two different dates, so a file created before the
    range and updated after it does not fall inside the range.
    """
    kind: ClassVar[PredicateKind] = PredicateKind.DATE
    after: Optional[date] = None
    before: Optional[date] = None

    def contains(self, candidate: date) -> bool:
        if self.after is not None and candidate < self.after:
            return False
        if self.before is not None and candidate > self.before:
            return False
        return True

    def intersect(self, other: "DateRangePredicate") -> "DateRangePredicate":
        """Range satisfying both this predicate's bounds and ``other``'s."""
        after = max((d for d in (self.after, other.after) if d is not None), default=None)
        before = min((d for d in (self.before, other.before) if d is not None), default=None)
        return DateRangePredicate(after=after, before=before)

    def matches(self, metadata: Optional[ExtractedMetadata], path: Path) -> bool:
        if metadata is None:
            return False
        return any(self.contains(candidate) for candidate in metadata.date_candidates())
