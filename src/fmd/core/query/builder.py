"""
Query construction from filter specifications.

Compiles every filter once, up front, so that invalid regular expressions,
malformed ``key:pattern`` fields and bad date boundaries are reported
before any file is touched.
"""

import logging
import re
from datetime import date
from typing import Callable, Dict, Iterable, List, Pattern, Union

from ...exceptions.query_exceptions import (
    FilterValidationError,
    InvalidDateError,
    InvalidFieldFilterError,
    InvalidPatternError,
    UnknownFilterError,
)
from ..metadata.frontmatter import DEFAULT_HEAD_LINES
from .predicates import (
    AuthorPredicate,
    DateRangePredicate,
    FieldPredicate,
    NamePredicate,
    Predicate,
    PredicateKind,
    TagPredicate,
    TitlePredicate,
)
from .types import FilterSpec, PredicateGroup, Query

logger = logging.getLogger(__name__)

BOUNDARY_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def _compile_regex(spec: FilterSpec, flags: int) -> Pattern[str]:
    try:
        return re.compile(spec.value, flags)
    except re.error as e:
        raise InvalidPatternError(
            f"Failed to compile {spec.kind.value} pattern '{spec.value}': {e}",
            filter_spec=str(spec),
            pattern=spec.value
        ) from e


def _build_tag(spec: FilterSpec) -> Predicate:
    if not spec.value.strip().lstrip("#"):
        raise FilterValidationError("Tag filter cannot be empty", filter_spec=str(spec))
    return TagPredicate(pattern=spec.value.strip())


def _build_title(spec: FilterSpec) -> Predicate:
    return TitlePredicate(regex=_compile_regex(spec, re.IGNORECASE))


def _build_name(spec: FilterSpec) -> Predicate:
    flags = re.IGNORECASE if spec.ignore_case else 0
    return NamePredicate(regex=_compile_regex(spec, flags))


def _build_author(spec: FilterSpec) -> Predicate:
    return AuthorPredicate(pattern=spec.value.strip().casefold())


def _build_field(spec: FilterSpec) -> Predicate:
    key, sep, pattern = spec.value.partition(":")
    if not sep:
        raise InvalidFieldFilterError(
            f"Invalid field filter format: '{spec.value}'. Expected 'field:pattern'",
            filter_spec=str(spec)
        )

    key = key.strip()
    pattern = pattern.strip()
    if not key and not pattern:
        raise InvalidFieldFilterError(
            f"Both field and pattern cannot be empty in filter '{spec.value}'",
            filter_spec=str(spec)
        )
    if not key:
        raise InvalidFieldFilterError(
            f"Field name cannot be empty in filter '{spec.value}'",
            filter_spec=str(spec)
        )
    if not pattern:
        raise InvalidFieldFilterError(
            f"Pattern cannot be empty in filter '{spec.value}'",
            filter_spec=str(spec)
        )

    return FieldPredicate(key=key.casefold(), pattern=pattern.casefold())


def parse_boundary_date(value: str, option: str = "date") -> date:
    """Parse a ``YYYY-MM-DD`` boundary date.

    Raises:
        InvalidDateError: If the value is not a valid calendar date in that format
    """
    text = value.strip()
    if BOUNDARY_DATE_PATTERN.match(text):
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
    raise InvalidDateError(
        f"Invalid date format for --{option}: '{value}'. Expected YYYY-MM-DD",
        filter_spec=f"{option}={value}"
    )


def _build_date_after(spec: FilterSpec) -> Predicate:
    return DateRangePredicate(after=parse_boundary_date(spec.value, spec.kind.value))


def _build_date_before(spec: FilterSpec) -> Predicate:
    return DateRangePredicate(before=parse_boundary_date(spec.value, spec.kind.value))


PREDICATE_BUILDERS: Dict[PredicateKind, Callable[[FilterSpec], Predicate]] = {
    PredicateKind.TAG: _build_tag,
    PredicateKind.TITLE: _build_title,
    PredicateKind.NAME: _build_name,
    PredicateKind.AUTHOR: _build_author,
    PredicateKind.FIELD: _build_field,
    PredicateKind.DATE_AFTER: _build_date_after,
    PredicateKind.DATE_BEFORE: _build_date_before,
}


def build_predicate(spec: FilterSpec) -> Predicate:
    """Compile one filter specification into its predicate."""
    builder = PREDICATE_BUILDERS.get(spec.kind)
    if builder is None:
        raise UnknownFilterError(f"Unknown filter kind '{spec.kind.value}'", filter_spec=str(spec))
    return builder(spec)


def build_query(
    filters: Iterable[Union[FilterSpec, str]] = (),
    head_limit: int = DEFAULT_HEAD_LINES,
    full_text: bool = False
) -> Query:
    """
    Build an immutable Query from filter specifications.

    Predicates are grouped by kind in the order each kind first appears;
    groups are ANDed, predicates within a group are ORed. Date bounds form
    a single group whose bounds must all hold for one and the same date.

    Args:
        filters: FilterSpec objects or ``kind=value`` strings
        head_limit: Lines to scan for metadata when a file has no frontmatter
        full_text: Scan whole files for tags and headings

    Returns:
        Query ready to be shared across worker threads

    Raises:
        FilterValidationError: If any filter or setting is invalid
    """
    if head_limit < 1:
        raise FilterValidationError(f"Head line limit must be at least 1, got {head_limit}")

    grouped: Dict[PredicateKind, List[Predicate]] = {}
    for item in filters:
        spec = FilterSpec.parse(item) if isinstance(item, str) else item
        predicate = build_predicate(spec)
        predicates = grouped.setdefault(predicate.kind, [])
        if isinstance(predicate, DateRangePredicate) and predicates:
            predicates[0] = predicates[0].intersect(predicate)
        else:
            predicates.append(predicate)

    groups = tuple(
        PredicateGroup(kind=kind, predicates=tuple(predicates))
        for kind, predicates in grouped.items()
    )
    logger.debug(
        f"Built query with {len(groups)} group(s): "
        + ", ".join(f"{group.kind.value} x{len(group)}" for group in groups)
    )
    return Query(groups=groups, head_limit=head_limit, full_text=full_text)
