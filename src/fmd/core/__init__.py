"""
Core engine for fmd.

- metadata: per-file metadata extraction
- query: predicates, query building and single-file evaluation
- runner: parallel evaluation over a candidate set
- walker: candidate file enumeration
"""

from .metadata import ExtractedMetadata, MetadataExtractor, extract
from .query import FilterSpec, Query, QueryEvaluator, build_query, evaluate
from .runner import FileWarning, ParallelRunner, RunResult, run
from .walker import DEFAULT_GLOB, EXCLUDED_DIRS, FileWalker, walk

__all__ = [
    'DEFAULT_GLOB',
    'EXCLUDED_DIRS',
    'ExtractedMetadata',
    'FileWalker',
    'FileWarning',
    'FilterSpec',
    'MetadataExtractor',
    'ParallelRunner',
    'Query',
    'QueryEvaluator',
    'RunResult',
    'build_query',
    'evaluate',
    'extract',
    'run',
    'walk',
]
