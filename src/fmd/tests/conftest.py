"""Shared test fixtures for fmd tests."""

from pathlib import Path
from typing import Callable, Dict

import pytest

from fmd.core.metadata import MetadataExtractor


@pytest.fixture
def write_note(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a text file under ``tmp_path`` and returning its path."""

    def _write(relative: str, content: str, encoding: str = "utf-8") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=encoding)
        return path

    return _write


@pytest.fixture
def notes_tree(write_note) -> Dict[str, Path]:
    """A small collection of notes in both metadata styles."""
    return {
        "meeting": write_note(
            "work/meeting.md",
            "---\n"
            "title: Team Meeting\n"
            "tags: [work, urgent]\n"
            "author: John Smith\n"
            "status: published\n"
            "date: 2025-03-01\n"
            "---\n"
            "\n"
            "Agenda for the week.\n",
        ),
        "journal": write_note(
            "personal/journal.md",
            "# Journal\n"
            "tags: #personal\n"
            "created: 2024-12-24\n"
            "\n"
            "Quiet day.\n",
        ),
        "draft": write_note(
            "work/draft.md",
            "---\n"
            "title: Quarterly Plan\n"
            "tags:\n"
            "  - work\n"
            "  - planning\n"
            "author: Jane Doe\n"
            "status: draft\n"
            "updated: 2025-06-15T09:30:00\n"
            "---\n"
            "Body text.\n",
        ),
        "readme": write_note(
            "README.md",
            "Plain file with no metadata at all.\n",
        ),
    }


class CountingExtractor(MetadataExtractor):
    """MetadataExtractor that records every path it was asked to open."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def extract(self, path, head_limit=10, full_text=False):
        self.calls.append(Path(path))
        return super().extract(path, head_limit, full_text)


@pytest.fixture
def counting_extractor() -> CountingExtractor:
    return CountingExtractor()
