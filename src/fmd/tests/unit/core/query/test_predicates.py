"""Unit tests for the predicate library."""

import re
from datetime import date
from pathlib import Path

import pytest

from fmd.core.metadata import MetadataExtractor
from fmd.core.query.predicates import (
    AuthorPredicate,
    DateRangePredicate,
    FieldPredicate,
    NamePredicate,
    PredicateKind,
    TagPredicate,
    TitlePredicate,
)

PATH = Path("notes/Team-Meeting.md")


@pytest.fixture
def metadata():
    return MetadataExtractor().extract_text(
        "---\n"
        "title: Team Meeting\n"
        "tags: [Work, urgent]\n"
        "author: John Smith\n"
        "status: Published\n"
        "date: 2025-01-01\n"
        "updated: 2025-03-15\n"
        "---\n",
        path=PATH,
    )


class TestPredicateKind:

    def test_only_name_needs_no_metadata(self):
        assert not PredicateKind.NAME.requires_metadata
        assert all(kind.requires_metadata for kind in PredicateKind if kind is not PredicateKind.NAME)


class TestTagPredicate:

    @pytest.mark.parametrize("pattern", ["work", "WORK", "#work", "#Urgent"])
    def test_matches_case_insensitively_with_or_without_hash(self, metadata, pattern):
        assert TagPredicate(pattern).matches(metadata, PATH)

    def test_absent_tag(self, metadata):
        assert not TagPredicate("personal").matches(metadata, PATH)

    def test_no_metadata(self):
        assert not TagPredicate("work").matches(None, PATH)


class TestTitlePredicate:

    def test_regex_search_case_insensitive(self, metadata):
        assert TitlePredicate(re.compile("meeting", re.IGNORECASE)).matches(metadata, PATH)
        assert TitlePredicate(re.compile("^team", re.IGNORECASE)).matches(metadata, PATH)

    def test_no_match(self, metadata):
        assert not TitlePredicate(re.compile("standup", re.IGNORECASE)).matches(metadata, PATH)

    def test_missing_title_never_matches(self):
        untitled = MetadataExtractor().extract_text("tags: x\n")
        assert not TitlePredicate(re.compile(".*")).matches(untitled, PATH)


class TestNamePredicate:

    def test_matches_base_name_only(self):
        assert NamePredicate(re.compile(r"Meeting\.md$")).matches(None, PATH)
        assert not NamePredicate(re.compile("notes")).matches(None, PATH)

    def test_case_sensitive_by_default(self):
        predicate = NamePredicate(re.compile("meeting"))
        assert not predicate.ignore_case
        assert not predicate.matches(None, PATH)

    def test_ignore_case(self):
        predicate = NamePredicate(re.compile("meeting", re.IGNORECASE))
        assert predicate.ignore_case
        assert predicate.matches(None, PATH)


class TestFieldAndAuthorPredicates:

    def test_field_substring_case_insensitive(self, metadata):
        assert FieldPredicate("status", "publish").matches(metadata, PATH)

    def test_field_missing_key(self, metadata):
        assert not FieldPredicate("priority", "high").matches(metadata, PATH)

    def test_field_matches_any_list_value(self, metadata):
        assert FieldPredicate("tags", "urg").matches(metadata, PATH)

    def test_author_substring(self, metadata):
        assert AuthorPredicate("smith").matches(metadata, PATH)
        assert not AuthorPredicate("jane").matches(metadata, PATH)


class TestDateRangePredicate:

    def test_boundaries_are_inclusive(self, metadata):
        assert DateRangePredicate(after=date(2025, 3, 15)).matches(metadata, PATH)
        assert DateRangePredicate(before=date(2025, 1, 1)).matches(metadata, PATH)

    def test_any_candidate_satisfies_one_sided_bound(self, metadata):
        # date is before the boundary but updated is after it
        assert DateRangePredicate(after=date(2025, 2, 1)).matches(metadata, PATH)
        assert DateRangePredicate(before=date(2025, 2, 1)).matches(metadata, PATH)

    def test_both_bounds_must_hold_for_the_same_date(self, metadata):
        # date 2025-01-01 and updated 2025-03-15 straddle February
        assert not DateRangePredicate(date(2025, 2, 1), date(2025, 2, 28)).matches(metadata, PATH)
        assert DateRangePredicate(date(2025, 3, 1), date(2025, 3, 31)).matches(metadata, PATH)

    def test_outside_range(self, metadata):
        assert not DateRangePredicate(after=date(2025, 4, 1)).matches(metadata, PATH)
        assert not DateRangePredicate(before=date(2024, 12, 31)).matches(metadata, PATH)

    def test_undated_document_never_matches(self):
        undated = MetadataExtractor().extract_text("title: x\n")
        assert not DateRangePredicate(after=date(1900, 1, 1)).matches(undated, PATH)
        assert not DateRangePredicate(before=date(2999, 1, 1)).matches(undated, PATH)

    def test_intersect_keeps_tightest_bounds(self):
        merged = DateRangePredicate(after=date(2025, 1, 1)).intersect(
            DateRangePredicate(after=date(2025, 2, 1), before=date(2025, 6, 30))
        )
        assert merged == DateRangePredicate(date(2025, 2, 1), date(2025, 6, 30))


class TestPredicatesAreImmutable:

    def test_frozen(self):
        predicate = TagPredicate("work")
        with pytest.raises(AttributeError):
            predicate.pattern = "other"
