"""
Parallel query evaluation across a candidate file set.

Each candidate is evaluated independently on a bounded thread pool. A
candidate that cannot be read becomes a warning and a non-match; it never
affects any other candidate or the run as a whole.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from itertools import islice
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..exceptions.extraction_exceptions import ExtractError, ExtractFailure
from .metadata.types import MetadataExtractor
from .query.evaluator import QueryEvaluator
from .query.types import Query

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileWarning:
    """A per-file problem surfaced with verbose diagnostics."""
    path: Path
    reason: ExtractFailure
    message: str

    def __str__(self) -> str:
        return f"Warning: Failed to read {self.path}: {self.message}"


@dataclass
class RunResult:
    """Result of evaluating a query over a candidate set."""
    matches: List[Path] = field(default_factory=list)
    warnings: List[FileWarning] = field(default_factory=list)
    candidates_evaluated: int = 0
    workers_used: int = 0
    execution_time: float = 0.0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


# Candidates submitted per batch, as a multiple of the worker count
BATCH_FACTOR = 4


def default_worker_count() -> int:
    """Worker pool size matching available hardware parallelism."""
    return os.cpu_count() or 1


class ParallelRunner:
    """Applies a QueryEvaluator to every candidate on a thread pool.

    Candidates are pulled from the input iterable one batch at a time and
    each batch is drained before the next is submitted, so a large walk is
    never held in memory as pending futures.
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        extractor: Optional[MetadataExtractor] = None,
        batch_size: Optional[int] = None
    ):
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        if batch_size is not None and batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.max_workers = max_workers or default_worker_count()
        self.batch_size = batch_size or self.max_workers * BATCH_FACTOR
        self.extractor = extractor or MetadataExtractor()

    def run(
        self,
        query: Query,
        candidates: Iterable[Union[str, Path]],
        preserve_order: bool = False
    ) -> RunResult:
        """Evaluate ``query`` against every candidate.

        Args:
            query: Immutable query shared by all workers
            candidates: Candidate paths, typically from the file walker
            preserve_order: Reorder matches by enumeration order

        Returns:
            RunResult with matches in completion order (or enumeration
            order when ``preserve_order`` is set) and per-file warnings
        """
        start_time = time.time()
        evaluator = QueryEvaluator(query, self.extractor)
        found: List[Tuple[int, Path]] = []
        warnings: List[FileWarning] = []
        evaluated = 0
        pending = enumerate(Path(candidate) for candidate in candidates)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            while True:
                batch = list(islice(pending, self.batch_size))
                if not batch:
                    break

                future_to_candidate = {}
                for index, path in batch:
                    future = executor.submit(evaluator.evaluate, path)
                    future_to_candidate[future] = (index, path)

                for future in as_completed(future_to_candidate):
                    index, path = future_to_candidate[future]
                    evaluated += 1
                    try:
                        matched = future.result()
                    except ExtractError as e:
                        logger.debug(f"Skipping {path}: {e}")
                        warnings.append(FileWarning(
                            path=path,
                            reason=e.reason,
                            message=str(e.cause or e.message)
                        ))
                        continue
                    except Exception as e:
                        logger.debug(f"Unexpected error evaluating {path}: {e}", exc_info=True)
                        warnings.append(FileWarning(
                            path=path,
                            reason=ExtractFailure.FAILED,
                            message=str(e) or type(e).__name__
                        ))
                        continue

                    if matched:
                        found.append((index, path))

        if preserve_order:
            found.sort(key=lambda item: item[0])
            warnings.sort(key=lambda warning: str(warning.path))

        result = RunResult(
            matches=[path for _, path in found],
            warnings=warnings,
            candidates_evaluated=evaluated,
            workers_used=self.max_workers,
            execution_time=time.time() - start_time
        )
        logger.debug(
            f"Evaluated {evaluated} candidate(s) on {self.max_workers} worker(s): "
            f"{len(result.matches)} match(es), {len(warnings)} warning(s) "
            f"in {result.execution_time:.3f}s"
        )
        return result


def run(
    query: Query,
    candidates: Iterable[Union[str, Path]],
    max_workers: Optional[int] = None,
    preserve_order: bool = False,
    extractor: Optional[MetadataExtractor] = None,
    batch_size: Optional[int] = None
) -> RunResult:
    """Evaluate ``query`` over ``candidates`` on a bounded worker pool."""
    runner = ParallelRunner(max_workers=max_workers, extractor=extractor, batch_size=batch_size)
    return runner.run(query, candidates, preserve_order=preserve_order)
