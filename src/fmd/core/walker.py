"""
Candidate file enumeration.

Walks one or more directory trees and yields the regular files whose names
match a glob, skipping hidden entries and common build, dependency and
cache directories.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set, Union

logger = logging.getLogger(__name__)

DEFAULT_GLOB = "**/*.md"

EXCLUDED_DIRS: Set[str] = {
    # Build output
    "target", "build", "dist", "out", "bin", "obj",
    # Dependencies
    "node_modules", "vendor", "bower_components",
    # Caches
    "__pycache__", ".cache", ".parcel-cache", ".gradle", ".m2",
    # Framework output
    ".next", ".nuxt", ".vitepress", ".docusaurus", ".output", ".serverless",
    # Editors
    ".idea", ".vscode", ".vs", ".obsidian",
    # Scratch and test artefacts
    "tmp", "temp", "coverage", ".nyc_output", ".pytest_cache", ".tox",
}


class FileWalker:
    """Yields candidate files under a set of directories."""

    def __init__(
        self,
        glob: str = DEFAULT_GLOB,
        max_depth: Optional[int] = None,
        excluded_dirs: Optional[Iterable[str]] = None
    ):
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.glob = glob
        self.max_depth = max_depth
        self.excluded_dirs: Set[str] = set(EXCLUDED_DIRS if excluded_dirs is None else excluded_dirs)

    def should_skip_directory(self, dir_name: str) -> bool:
        """Check whether a directory is hidden or excluded."""
        if dir_name.startswith("."):
            return True
        return dir_name in self.excluded_dirs

    def should_skip_file(self, file_name: str) -> bool:
        return file_name.startswith(".")

    def matches_glob(self, relative_path: Union[str, Path]) -> bool:
        """Match a root-relative path against the glob.

        A glob without ``/`` is matched against the base name only. A glob
        with ``/`` is matched against the whole relative path, and a leading
        ``**/`` also matches files directly under the root.
        """
        relative = Path(relative_path).as_posix()
        if "/" not in self.glob:
            return fnmatch.fnmatchcase(Path(relative).name, self.glob)

        if fnmatch.fnmatchcase(relative, self.glob):
            return True
        if self.glob.startswith("**/"):
            return fnmatch.fnmatchcase(relative, self.glob[3:])
        return False

    def walk(self, dirs: Iterable[Union[str, Path]]) -> Iterator[Path]:
        """Yield matching files under each of ``dirs``, in sorted order per directory.

        A file given directly is yielded if its name matches the glob.
        Missing paths and unreadable directories are logged and skipped.
        """
        for entry in dirs:
            root = Path(entry)
            if root.is_file():
                if self.matches_glob(root.name):
                    yield root
                continue
            if not root.is_dir():
                logger.warning(f"Skipping {root}: not a file or directory")
                continue
            yield from self._walk_root(root)

    def _walk_root(self, root: Path) -> Iterator[Path]:
        def on_error(error: OSError) -> None:
            logger.warning(f"Cannot read directory {error.filename}: {error.strerror}")

        for current, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=False):
            current_path = Path(current)
            depth = len(current_path.relative_to(root).parts) + 1

            if self.max_depth is not None and depth >= self.max_depth:
                dirnames[:] = []
            else:
                dirnames[:] = sorted(d for d in dirnames if not self.should_skip_directory(d))

            for name in sorted(filenames):
                if self.should_skip_file(name):
                    continue
                path = current_path / name
                if not path.is_file():
                    continue
                if self.matches_glob(path.relative_to(root)):
                    yield path


def walk(
    dirs: Iterable[Union[str, Path]],
    glob: str = DEFAULT_GLOB,
    max_depth: Optional[int] = None,
    excluded_dirs: Optional[Iterable[str]] = None
) -> List[Path]:
    """Collect candidate files under ``dirs``."""
    walker = FileWalker(glob=glob, max_depth=max_depth, excluded_dirs=excluded_dirs)
    return list(walker.walk(dirs))
