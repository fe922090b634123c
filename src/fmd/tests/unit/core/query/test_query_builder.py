"""
Unit tests for query construction.

Tests cover filter parsing, grouping by kind, and rejection of invalid
patterns, field filters and date boundaries.
"""

from datetime import date

import pytest

from fmd.core.query import (
    DateRangePredicate,
    FieldPredicate,
    FilterSpec,
    PredicateKind,
    build_query,
    parse_boundary_date,
)
from fmd.exceptions import (
    FilterValidationError,
    InvalidDateError,
    InvalidFieldFilterError,
    InvalidPatternError,
    UnknownFilterError,
)


class TestFilterSpec:
    """Test the textual kind=value form."""

    def test_parse(self):
        spec = FilterSpec.parse("field=status:draft")

        assert spec.kind is PredicateKind.FIELD
        assert spec.value == "status:draft"
        assert str(spec) == "field=status:draft"

    def test_value_may_contain_equals(self):
        assert FilterSpec.parse("title=a=b").value == "a=b"

    def test_kind_is_case_insensitive(self):
        assert FilterSpec.parse("Date-After=2025-01-01").kind is PredicateKind.DATE_AFTER

    def test_missing_equals(self):
        with pytest.raises(UnknownFilterError):
            FilterSpec.parse("work")

    def test_unknown_kind(self):
        with pytest.raises(UnknownFilterError) as exc_info:
            FilterSpec.parse("color=blue")
        assert "color" in str(exc_info.value)


class TestBuildQuery:
    """Test grouping and settings."""

    def test_no_filters_is_enumeration(self):
        query = build_query()

        assert query.is_enumeration
        assert not query.requires_metadata
        assert query.head_limit == 10
        assert not query.full_text

    def test_same_kind_grouped(self):
        query = build_query(["tag=a", "title=b", "tag=c"])

        assert [group.kind for group in query.groups] == [PredicateKind.TAG, PredicateKind.TITLE]
        assert len(query.group(PredicateKind.TAG)) == 2

    def test_fields_with_different_keys_share_one_group(self):
        query = build_query(["field=author:John", "field=status:published"])

        assert len(query.groups) == 1
        assert len(query.group(PredicateKind.FIELD)) == 2

    def test_date_bounds_share_one_range(self):
        query = build_query(["tag=a", "date-after=2025-01-01", "date-before=2025-12-31"])

        assert [group.kind for group in query.groups] == [PredicateKind.TAG, PredicateKind.DATE]
        assert query.group(PredicateKind.DATE).predicates == (
            DateRangePredicate(after=date(2025, 1, 1), before=date(2025, 12, 31)),
        )

    def test_repeated_date_bounds_narrow_the_range(self):
        query = build_query(["date-after=2025-01-01", "date-after=2025-03-01"])

        assert query.group(PredicateKind.DATE).predicates == (
            DateRangePredicate(after=date(2025, 3, 1)),
        )

    def test_date_group_kind_is_not_a_filter(self):
        with pytest.raises(UnknownFilterError):
            FilterSpec.parse("date=2025-01-01")

    def test_name_group_excluded_from_metadata_groups(self):
        query = build_query(["name=foo", "tag=x"])

        assert query.name_group is not None
        assert [group.kind for group in query.metadata_groups] == [PredicateKind.TAG]

    def test_name_only_query_needs_no_metadata(self):
        assert not build_query(["name=foo"]).requires_metadata

    def test_settings_carried(self):
        query = build_query([], head_limit=25, full_text=True)

        assert query.head_limit == 25
        assert query.full_text

    def test_head_limit_must_be_positive(self):
        with pytest.raises(FilterValidationError):
            build_query([], head_limit=0)

    def test_name_ignore_case_from_spec(self):
        query = build_query([FilterSpec(PredicateKind.NAME, "readme", ignore_case=True)])
        assert query.name_group.predicates[0].ignore_case

    def test_field_key_and_pattern_trimmed_and_folded(self):
        query = build_query(["field= Status : Draft "])
        predicate = query.group(PredicateKind.FIELD).predicates[0]

        assert predicate == FieldPredicate(key="status", pattern="draft")

    def test_field_pattern_may_contain_colon(self):
        query = build_query(["field=time:10:30"])
        assert query.group(PredicateKind.FIELD).predicates[0].pattern == "10:30"


class TestUsageErrors:
    """Test rejection of invalid filters."""

    @pytest.mark.parametrize("spec", ["title=[unclosed", "name=(?P<bad"])
    def test_invalid_regex(self, spec):
        with pytest.raises(InvalidPatternError):
            build_query([spec])

    def test_field_without_colon(self):
        with pytest.raises(InvalidFieldFilterError, match="Expected 'field:pattern'"):
            build_query(["field=nocolon"])

    @pytest.mark.parametrize("value,message", [
        (":", "Both field and pattern cannot be empty"),
        (":draft", "Field name cannot be empty"),
        ("status: ", "Pattern cannot be empty"),
    ])
    def test_field_empty_sides(self, value, message):
        with pytest.raises(InvalidFieldFilterError, match=message):
            build_query([f"field={value}"])

    def test_empty_tag(self):
        with pytest.raises(FilterValidationError):
            build_query(["tag=#"])

    @pytest.mark.parametrize("value", ["2025-13-01", "2025-02-30", "2025-1-1", "01/02/2025", ""])
    def test_invalid_boundary_dates(self, value):
        with pytest.raises(InvalidDateError, match="Expected YYYY-MM-DD"):
            build_query([f"date-after={value}"])

    def test_all_usage_errors_share_a_base(self):
        assert issubclass(InvalidDateError, FilterValidationError)
        assert issubclass(InvalidPatternError, FilterValidationError)
        assert issubclass(InvalidFieldFilterError, FilterValidationError)


class TestParseBoundaryDate:

    def test_valid(self):
        assert parse_boundary_date("2025-01-01") == date(2025, 1, 1)

    def test_error_names_option(self):
        with pytest.raises(InvalidDateError, match="--date-before"):
            parse_boundary_date("soon", "date-before")
