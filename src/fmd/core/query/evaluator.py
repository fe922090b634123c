"""
Query evaluation for a single file.

Groups are ANDed and predicates within a group are ORed. The name group is
checked first because it needs no file I/O; metadata is extracted at most
once per file and only when a remaining group needs it.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..metadata.types import ExtractedMetadata, MetadataExtractor
from .types import Query

logger = logging.getLogger(__name__)


class QueryEvaluator:
    """Decides match or no-match for one file at a time.

    Holds only the shared, read-only Query and a stateless extractor, so one
    evaluator can serve every worker thread of a run.
    """

    def __init__(self, query: Query, extractor: Optional[MetadataExtractor] = None):
        self.query = query
        self.extractor = extractor or MetadataExtractor()

    def evaluate(self, path: Union[str, Path]) -> bool:
        """Evaluate the query against the file at ``path``.

        Args:
            path: Candidate file

        Returns:
            True if every group has at least one matching predicate

        Raises:
            ExtractError: If metadata was needed and could not be extracted
        """
        path = Path(path)
        if self.query.is_enumeration:
            return True

        name_group = self.query.name_group
        if name_group is not None and not name_group.matches(None, path):
            return False

        metadata: Optional[ExtractedMetadata] = None
        for group in self.query.metadata_groups:
            if metadata is None:
                metadata = self.extractor.extract(
                    path, self.query.head_limit, self.query.full_text
                )
            if not group.matches(metadata, path):
                logger.debug(f"{path}: no {group.kind.value} filter matched")
                return False

        return True


def evaluate(
    query: Query,
    path: Union[str, Path],
    extractor: Optional[MetadataExtractor] = None
) -> bool:
    """Evaluate ``query`` against one file."""
    return QueryEvaluator(query, extractor).evaluate(path)
