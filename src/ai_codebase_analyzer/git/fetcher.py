"""
Batched Diff Fetcher

Retrieves diff text and per-file statistics for the filtered file list,
partitioning the list so no single git invocation exceeds OS argument limits.
"""

import logging
from typing import List, Sequence, Tuple

from ..models.git_diff import FileStats
from ..models.revision import ComparisonEndpoints
from ..utils import best_effort
from .interface import GitBackend


logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


def make_batches(paths: Sequence[str], batch_size: int = DEFAULT_BATCH_SIZE) -> List[List[str]]:
    """
    Partition paths into consecutive batches.

    Args:
        paths: Paths in their original order
        batch_size: Maximum number of paths per batch

    Returns:
        List of batches; concatenated they reproduce `paths`
    """
    if batch_size <= 0:
        raise ValueError("Batch size must be positive")
    return [list(paths[i:i + batch_size]) for i in range(0, len(paths), batch_size)]


class BatchedDiffFetcher:
    """
    Fetches diff text and numstat summaries for a set of safe files.

    Files are partitioned, not diff content, so every per-file diff block
    comes from exactly one batch.
    """

    def __init__(self, backend: GitBackend, batch_size: int = DEFAULT_BATCH_SIZE):
        """
        Initialize fetcher.

        Args:
            backend: Git backend
            batch_size: Number of paths passed to a single git invocation
        """
        if batch_size <= 0:
            raise ValueError("Batch size must be positive")
        self.backend = backend
        self.batch_size = batch_size

    def fetch(
        self,
        endpoints: ComparisonEndpoints,
        safe_files: Sequence[str],
        skipped_count: int = 0,
    ) -> Tuple[str, List[FileStats]]:
        """
        Fetch diff text and per-file statistics.

        Args:
            endpoints: Resolved comparison
            safe_files: Files that passed the ignore and size filters
            skipped_count: Number of files skipped for size, for logging

        Returns:
            Tuple of (diff_text, file_stats)
        """
        if not safe_files:
            logger.info("No files to diff after filtering")
            return "", []

        logger.info(
            f"Running filtered diff ({len(safe_files)} files, {skipped_count} skipped due to size)"
        )

        batches = make_batches(safe_files, self.batch_size)
        if len(batches) > 1:
            logger.info(f"Processing {len(safe_files)} files in batches of {self.batch_size}")

        diff_batches = []
        for batch_num, batch in enumerate(batches, start=1):
            if len(batches) > 1:
                logger.debug(f"Processing batch {batch_num}/{len(batches)} ({len(batch)} files)")
            diff_batches.append(self.backend.diff_text(endpoints, batch))

        diff_text = '\n'.join(diff_batches)
        logger.info(f"Filtered diff size: {len(diff_text) / 1024:.2f} KB")

        stats = best_effort(
            lambda: self._fetch_summary(endpoints, batches),
            lambda error: [FileStats(path=path, insertions=0, deletions=0) for path in safe_files],
            "Diff summary",
        )
        return diff_text, stats

    def _fetch_summary(self, endpoints: ComparisonEndpoints, batches: List[List[str]]) -> List[FileStats]:
        stats: List[FileStats] = []
        for batch in batches:
            stats.extend(self.backend.diff_summary(endpoints, batch))
        return stats
