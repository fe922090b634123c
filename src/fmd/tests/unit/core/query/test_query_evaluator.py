"""
Unit tests for QueryEvaluator.

Tests cover OR-within-kind and AND-across-kind composition, the name
short-circuit, lazy single extraction, and per-file error propagation.
"""

import pytest

from fmd.core.query import QueryEvaluator, build_query, evaluate
from fmd.exceptions import UnreadableFileError


@pytest.fixture
def notes(write_note):
    return {
        "a": write_note("a.md", "---\ntags: [work, urgent]\ntitle: Team Meeting\n---\n"),
        "b": write_note("b.md", "# Notes\ntags: #personal\n"),
        "c": write_note("c.md", "---\ntags: work\ntitle: Standup\n---\n"),
    }


def matching(query, notes, extractor=None):
    evaluator = QueryEvaluator(query, extractor)
    return {key for key, path in notes.items() if evaluator.evaluate(path)}


class TestComposition:
    """Test group composition."""

    def test_empty_query_matches_everything(self, notes):
        assert matching(build_query(), notes) == {"a", "b", "c"}

    def test_or_within_kind_is_union(self, notes):
        work = matching(build_query(["tag=work"]), notes)
        personal = matching(build_query(["tag=personal"]), notes)
        both = matching(build_query(["tag=work", "tag=personal"]), notes)

        assert both == work | personal == {"a", "b", "c"}

    def test_and_across_kinds_is_intersection(self, notes):
        tag = matching(build_query(["tag=work"]), notes)
        title = matching(build_query(["title=meeting"]), notes)
        combined = matching(build_query(["tag=work", "title=meeting"]), notes)

        assert combined == tag & title == {"a"}

    def test_name_combined_with_metadata(self, notes):
        assert matching(build_query(["name=^c", "tag=work"]), notes) == {"c"}


class TestShortCircuit:
    """Test that files are opened only when needed."""

    def test_empty_query_never_opens_files(self, notes, counting_extractor):
        matching(build_query(), notes, counting_extractor)
        assert counting_extractor.calls == []

    def test_name_only_query_never_opens_files(self, notes, counting_extractor):
        assert matching(build_query(["name=^a"]), notes, counting_extractor) == {"a"}
        assert counting_extractor.calls == []

    def test_failing_name_skips_extraction(self, notes, counting_extractor):
        matching(build_query(["name=^a", "tag=work"]), notes, counting_extractor)
        assert counting_extractor.calls == [notes["a"]]

    def test_single_extraction_for_many_groups(self, notes, counting_extractor):
        query = build_query(["tag=work", "title=meeting", "field=title:team"])
        evaluator = QueryEvaluator(query, counting_extractor)

        assert evaluator.evaluate(notes["a"])
        assert counting_extractor.calls == [notes["a"]]


class TestErrors:

    def test_unreadable_file_raises(self, tmp_path):
        with pytest.raises(UnreadableFileError):
            evaluate(build_query(["tag=x"]), tmp_path / "missing.md")

    def test_unreadable_file_irrelevant_for_enumeration(self, tmp_path):
        assert evaluate(build_query(), tmp_path / "missing.md")
