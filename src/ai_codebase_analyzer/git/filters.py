"""
Changed File Collection and Filtering

Collects changed paths without diff content, then drops ignored paths and
paths whose blob exceeds the configured size limit. Ignored paths are never
size-checked.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..models.git_diff import SkippedFile
from ..models.revision import ComparisonEndpoints
from .client import GitCommandError
from .interface import GitBackend


logger = logging.getLogger(__name__)

IgnorePredicate = Callable[[str], bool]


class NameCollector:
    """Lists changed paths for a comparison with a name-only query."""

    def __init__(self, backend: GitBackend):
        self.backend = backend

    def collect(self, endpoints: ComparisonEndpoints, label: str = "") -> List[str]:
        logger.info(f"Getting changed files list ({label or 'diff'}, name-only)...")
        paths = self.backend.name_only_diff(endpoints)
        logger.debug(f"Name-only diff reported {len(paths)} files")
        return paths


class BlobSizeGate:
    """
    Determines blob sizes at the head side of a comparison and classifies
    files as safe or skipped-for-size.

    Sizes come from `git cat-file -s` for committed blobs and from a stat
    call for the working tree, so file content is never loaded.
    """

    def __init__(self, backend: GitBackend, max_blob_size: int):
        """
        Initialize blob size gate.

        Args:
            backend: Git backend used for blob size lookups
            max_blob_size: Maximum allowed blob size in bytes
        """
        self.backend = backend
        self.max_blob_size = max_blob_size
        self._toplevel: Optional[Path] = None

    @staticmethod
    def size_revision(endpoints: ComparisonEndpoints) -> Optional[str]:
        """Revision whose blob is measured; None means the working tree."""
        if endpoints.is_uncommitted:
            return None
        return endpoints.head

    def _working_tree_root(self) -> Path:
        if self._toplevel is None:
            self._toplevel = Path(self.backend.toplevel())
        return self._toplevel

    def size_of(self, endpoints: ComparisonEndpoints, path: str) -> int:
        """
        Get the size of a file at the head side without reading it.

        Args:
            endpoints: Resolved comparison
            path: Path relative to the repository root

        Returns:
            Size in bytes, or 0 if the file does not exist at that side
        """
        revision = self.size_revision(endpoints)

        if revision is None:
            full_path = self._working_tree_root() / path
            try:
                return full_path.lstat().st_size
            except OSError:
                return 0

        try:
            return self.backend.blob_size(revision, path)
        except GitCommandError:
            # Deleted at head
            return 0

    def classify(self, endpoints: ComparisonEndpoints, path: str) -> Optional[SkippedFile]:
        """
        Classify a file against the size limit.

        Returns:
            SkippedFile if the file exceeds the limit, otherwise None
        """
        size = self.size_of(endpoints, path)
        if size > self.max_blob_size:
            return SkippedFile(
                path=path,
                size=size,
                reason=f"File size ({size} bytes) exceeds the configured limit of {self.max_blob_size} bytes.",
            )
        return None


def apply_ignore_filter(paths: List[str], ignores: Optional[IgnorePredicate]) -> Tuple[List[str], List[str]]:
    """
    Split paths into (kept, ignored) using the caller's ignore predicate.

    Args:
        paths: Candidate paths
        ignores: Predicate returning True for paths to exclude, or None

    Returns:
        Tuple of (kept_paths, ignored_paths), both in input order
    """
    if ignores is None:
        return list(paths), []

    kept, ignored = [], []
    for path in paths:
        if ignores(path):
            logger.debug(f"Ignoring file in git diff: {path}")
            ignored.append(path)
        else:
            kept.append(path)
    return kept, ignored


def apply_size_filter(
    paths: List[str],
    endpoints: ComparisonEndpoints,
    gate: BlobSizeGate,
) -> Tuple[List[str], List[SkippedFile]]:
    """
    Split paths into (safe, skipped) using the blob size gate.

    Returns:
        Tuple of (safe_paths, skipped_files), both in input order
    """
    safe, skipped = [], []
    for path in paths:
        skipped_file = gate.classify(endpoints, path)
        if skipped_file is None:
            safe.append(path)
            continue

        logger.warning(
            f"Skipping large file in diff analysis: {path} "
            f"(size={skipped_file.size}, limit={gate.max_blob_size})"
        )
        skipped.append(skipped_file)
    return safe, skipped


@dataclass(frozen=True)
class FilterOutcome:
    """Result of the filter pipeline."""
    safe_files: Tuple[str, ...]
    skipped_files: Tuple[SkippedFile, ...]
    ignored_files: Tuple[str, ...]

    @property
    def total(self) -> int:
        return len(self.safe_files) + len(self.skipped_files) + len(self.ignored_files)


class FilterPipeline:
    """Applies the ignore filter, then the size filter, in that fixed order."""

    def __init__(self, gate: BlobSizeGate, ignores: Optional[IgnorePredicate] = None):
        self.gate = gate
        self.ignores = ignores

    def run(self, endpoints: ComparisonEndpoints, paths: List[str]) -> FilterOutcome:
        kept, ignored = apply_ignore_filter(paths, self.ignores)
        if self.ignores is not None:
            logger.info(
                f"Files after ignore filtering: {len(kept)}/{len(paths)} (excluded: {len(ignored)})"
            )

        safe, skipped = apply_size_filter(kept, endpoints, self.gate)
        return FilterOutcome(
            safe_files=tuple(safe),
            skipped_files=tuple(skipped),
            ignored_files=tuple(ignored),
        )
