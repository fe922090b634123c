"""
Types and data structures for metadata queries.

This module contains the filter specification accepted from the command
line, the OR-groups of predicates and the immutable Query built from them.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from ...exceptions.query_exceptions import UnknownFilterError
from ..metadata.frontmatter import DEFAULT_HEAD_LINES
from ..metadata.types import ExtractedMetadata
from .predicates import Predicate, PredicateKind


@dataclass(frozen=True)
class FilterSpec:
    """A typed filter specification, e.g. ``tag=work`` or ``field=status:draft``.

    Attributes:
        kind: Predicate kind the filter compiles to
        value: Raw filter argument
        ignore_case: Case-insensitive matching, used by name filters
    """
    kind: PredicateKind
    value: str
    ignore_case: bool = False

    @classmethod
    def parse(cls, text: str, ignore_case: bool = False) -> "FilterSpec":
        """Parse the textual ``kind=value`` form.

        Raises:
            UnknownFilterError: If there is no ``=`` or the kind is unknown
        """
        kind_name, sep, value = text.partition("=")
        if not sep:
            raise UnknownFilterError(
                f"Invalid filter '{text}'. Expected 'kind=value'", filter_spec=text
            )
        try:
            kind = PredicateKind(kind_name.strip().lower())
        except ValueError:
            kind = None
        if kind is None or not kind.is_filter_kind:
            known = ", ".join(k.value for k in PredicateKind if k.is_filter_kind)
            raise UnknownFilterError(
                f"Unknown filter kind '{kind_name}' in '{text}'. Known kinds: {known}",
                filter_spec=text
            )
        return cls(kind=kind, value=value, ignore_case=ignore_case)

    def __str__(self) -> str:
        return f"{self.kind.value}={self.value}"


@dataclass(frozen=True)
class PredicateGroup:
    """Same-kind predicates combined with logical OR."""
    kind: PredicateKind
    predicates: Tuple[Predicate, ...]

    def matches(self, metadata: Optional[ExtractedMetadata], path: Path) -> bool:
        return any(predicate.matches(metadata, path) for predicate in self.predicates)

    def __len__(self) -> int:
        return len(self.predicates)


@dataclass(frozen=True)
class Query:
    """OR-groups ANDed together, plus the scan settings they run with.

    A Query with no groups matches every candidate.
    """
    groups: Tuple[PredicateGroup, ...] = ()
    head_limit: int = DEFAULT_HEAD_LINES
    full_text: bool = False

    @property
    def is_enumeration(self) -> bool:
        return not self.groups

    def group(self, kind: PredicateKind) -> Optional[PredicateGroup]:
        for group in self.groups:
            if group.kind is kind:
                return group
        return None

    @property
    def name_group(self) -> Optional[PredicateGroup]:
        return self.group(PredicateKind.NAME)

    @property
    def metadata_groups(self) -> Tuple[PredicateGroup, ...]:
        """Groups that need extracted metadata, in the order first specified."""
        return tuple(group for group in self.groups if group.kind.requires_metadata)

    @property
    def requires_metadata(self) -> bool:
        return bool(self.metadata_groups)
