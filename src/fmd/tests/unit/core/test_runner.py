"""Unit tests for ParallelRunner."""

import os
from pathlib import Path

import pytest

from fmd.core.metadata import MetadataExtractor
from fmd.core.query import build_query
from fmd.core.runner import FileWarning, ParallelRunner, RunResult, default_worker_count, run
from fmd.exceptions import ExtractFailure


@pytest.fixture
def candidates(write_note):
    paths = []
    for i in range(20):
        tag = "even" if i % 2 == 0 else "odd"
        paths.append(write_note(f"note{i:02d}.md", f"---\ntags: {tag}\n---\n"))
    return paths


class TestParallelRunner:
    """Test parallel evaluation over a candidate set."""

    def test_default_worker_count(self):
        assert default_worker_count() == (os.cpu_count() or 1)
        assert ParallelRunner().max_workers == default_worker_count()

    def test_invalid_worker_count(self):
        with pytest.raises(ValueError):
            ParallelRunner(max_workers=0)

    def test_matches_independent_of_worker_count(self, candidates):
        query = build_query(["tag=even"])
        expected = set(candidates[::2])

        for workers in (1, 4, 16):
            result = ParallelRunner(max_workers=workers).run(query, candidates)
            assert set(result.matches) == expected
            assert result.candidates_evaluated == len(candidates)

    def test_preserve_order(self, candidates):
        result = ParallelRunner(max_workers=8).run(
            build_query(["tag=odd"]), reversed(candidates), preserve_order=True
        )

        assert result.matches == list(reversed(candidates[1::2]))

    def test_empty_candidates(self):
        result = run(build_query(["tag=x"]), [])

        assert isinstance(result, RunResult)
        assert result.matches == []
        assert result.candidates_evaluated == 0

    def test_accepts_string_paths(self, candidates):
        result = run(build_query(["tag=even"]), [str(candidates[0])])
        assert result.matches == [Path(candidates[0])]


class TestFailureIsolation:
    """Test that per-file failures stay per-file."""

    def test_unreadable_candidate_becomes_warning(self, candidates, tmp_path):
        bad = tmp_path / "binary.md"
        bad.write_bytes(b"\xff\xfe\x00garbage")
        missing = tmp_path / "missing.md"

        result = run(
            build_query(["tag=even"]),
            candidates + [bad, missing],
            max_workers=4,
            preserve_order=True,
        )

        assert result.matches == candidates[::2]
        assert result.has_warnings
        assert {warning.path for warning in result.warnings} == {bad, missing}
        assert all(w.reason is ExtractFailure.UNREADABLE for w in result.warnings)

    def test_malformed_candidate_becomes_warning(self, write_note):
        good = write_note("good.md", "---\ntags: x\n---\n")
        huge = write_note("huge.md", "---\n" + "k: v\n" * 1200 + "---\n")

        result = run(build_query(["tag=x"]), [good, huge])

        assert result.matches == [good]
        assert len(result.warnings) == 1
        assert result.warnings[0].reason is ExtractFailure.MALFORMED

    def test_warning_message(self):
        warning = FileWarning(Path("a.md"), ExtractFailure.UNREADABLE, "permission denied")
        assert str(warning) == "Warning: Failed to read a.md: permission denied"

    def test_unexpected_error_becomes_warning(self, candidates):
        broken = candidates[0]

        class BrokenExtractor(MetadataExtractor):
            def extract(self, path, head_limit=10, full_text=False):
                if Path(path) == broken:
                    raise RuntimeError("boom")
                return super().extract(path, head_limit, full_text)

        result = run(
            build_query(["tag=even"]),
            candidates,
            max_workers=4,
            extractor=BrokenExtractor(),
            preserve_order=True,
        )

        assert result.matches == candidates[2::2]
        assert result.candidates_evaluated == len(candidates)
        assert len(result.warnings) == 1
        assert result.warnings[0].path == broken
        assert result.warnings[0].reason is ExtractFailure.FAILED
        assert result.warnings[0].message == "boom"


class TestBatching:
    """Test that candidates are pulled one batch at a time."""

    def test_default_batch_size(self):
        assert ParallelRunner(max_workers=3).batch_size == 12

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            ParallelRunner(batch_size=0)

    def test_stream_is_drained_batch_by_batch(self, candidates, counting_extractor):
        pulled = []

        def stream():
            for path in candidates:
                # never more than one batch ahead of finished evaluations
                assert len(pulled) - len(counting_extractor.calls) < 3
                pulled.append(path)
                yield path

        result = ParallelRunner(max_workers=2, extractor=counting_extractor, batch_size=3).run(
            build_query(["tag=even"]), stream(), preserve_order=True
        )

        assert result.matches == candidates[::2]
        assert result.candidates_evaluated == len(candidates)
        assert len(counting_extractor.calls) == len(candidates)
