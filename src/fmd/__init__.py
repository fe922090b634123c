"""
fmd: find Markdown files by metadata.

Extracts tags, title, author, arbitrary fields and dates from the top of
each document (frontmatter or the first few lines) and evaluates a compound
filter against them: filters of the same kind are ORed, different kinds are
ANDed.

Usage:
    from fmd import build_query, run, walk

    query = build_query(["tag=work", "date-after=2025-01-01"])
    result = run(query, walk(["notes"]))
    for path in sorted(result.matches):
        print(path)
"""

__version__ = "0.1.0"

from .core import (
    DEFAULT_GLOB,
    EXCLUDED_DIRS,
    ExtractedMetadata,
    FileWalker,
    FileWarning,
    FilterSpec,
    MetadataExtractor,
    ParallelRunner,
    Query,
    QueryEvaluator,
    RunResult,
    build_query,
    evaluate,
    extract,
    run,
    walk,
)

__all__ = [
    "__version__",
    "DEFAULT_GLOB",
    "EXCLUDED_DIRS",
    "ExtractedMetadata",
    "FileWalker",
    "FileWarning",
    "FilterSpec",
    "MetadataExtractor",
    "ParallelRunner",
    "Query",
    "QueryEvaluator",
    "RunResult",
    "build_query",
    "evaluate",
    "extract",
    "run",
    "walk",
]
