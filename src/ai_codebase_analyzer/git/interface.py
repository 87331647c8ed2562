"""
Git Backend Interface

Read-only version-control queries consumed by the diff extraction pipeline.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.git_diff import FileStats
from ..models.revision import ComparisonEndpoints


class GitBackend(ABC):
    """
    Queries a repository for changed paths, diff text, numstat counts and
    blob sizes. Paths are always relative to the repository root.
    Implementations never modify the repository.
    """

    @abstractmethod
    def name_only_diff(self, endpoints: ComparisonEndpoints) -> List[str]:
        """Return the changed file paths without fetching any diff content."""

    @abstractmethod
    def diff_text(self, endpoints: ComparisonEndpoints, paths: List[str]) -> str:
        """Return the unified diff text restricted to the given paths."""

    @abstractmethod
    def diff_summary(self, endpoints: ComparisonEndpoints, paths: List[str]) -> List[FileStats]:
        """Return per-file insertion/deletion counts restricted to the given paths."""

    @abstractmethod
    def blob_size(self, revision: str, path: str) -> int:
        """Return the blob size of path at revision without reading its content."""

    @abstractmethod
    def resolve_ref(self, ref: str) -> Optional[str]:
        """Return the commit hash for ref, or None if it does not exist."""

    @abstractmethod
    def current_branch(self) -> str:
        """Return the name of the checked-out branch."""

    @abstractmethod
    def toplevel(self) -> str:
        """Return the absolute path of the working tree root."""
