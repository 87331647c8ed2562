"""
Git Diff Analyzer

Orchestrates secure git diff extraction: revision resolution, name-only
collection, ignore and size filtering, batched diff retrieval and assembly.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..config import AppConfig, get_config
from ..errors import AnalyzerError, InternalError
from ..models.git_diff import DiffResultData
from ..models.revision import RevisionSpec, Uncommitted
from ..security.path_validator import validate_secure_path
from .client import SubprocessGitClient
from .fetcher import DEFAULT_BATCH_SIZE, BatchedDiffFetcher
from .filters import BlobSizeGate, FilterPipeline, IgnorePredicate, NameCollector
from .interface import GitBackend
from .parser import DiffAssembler
from .revision import RevisionResolver


logger = logging.getLogger(__name__)


class GitDiffAnalyzer:
    """
    Extracts a structured, size-bounded diff from a git backend.

    Each step completes before the next begins; nothing is kept between calls.
    """

    def __init__(self, backend: GitBackend, max_blob_size: int, batch_size: int = DEFAULT_BATCH_SIZE):
        """
        Initialize analyzer.

        Args:
            backend: Git backend bound to the repository
            max_blob_size: Maximum blob size in bytes; larger files are skipped
            batch_size: Number of paths per git diff invocation
        """
        self.backend = backend
        self.max_blob_size = max_blob_size
        self.batch_size = batch_size

    def extract(self, spec: Optional[RevisionSpec] = None, ignores: Optional[IgnorePredicate] = None) -> DiffResultData:
        """
        Extract diff data for a revision specification.

        Args:
            spec: RevisionSpec variant (defaults to uncommitted changes)
            ignores: Optional predicate returning True for paths to exclude

        Returns:
            DiffResultData for the filtered file set
        """
        resolved = RevisionResolver(self.backend).resolve(spec or Uncommitted())
        endpoints = resolved.endpoints

        changed = NameCollector(self.backend).collect(endpoints, resolved.label)

        gate = BlobSizeGate(self.backend, self.max_blob_size)
        outcome = FilterPipeline(gate, ignores).run(endpoints, changed)

        fetcher = BatchedDiffFetcher(self.backend, self.batch_size)
        diff_text, stats = fetcher.fetch(endpoints, outcome.safe_files, len(outcome.skipped_files))

        safe = set(outcome.safe_files)
        text_stats = [stat for stat in DiffAssembler.drop_binary(stats) if stat.path in safe]
        files = DiffAssembler().assemble(diff_text, text_stats)

        result = DiffResultData.from_entries(
            files,
            revision_info=resolved.revision_info,
            skipped_files=list(outcome.skipped_files),
        )

        logger.info(
            f"Git diff extracted successfully: {result.summary.files_modified} files, "
            f"+{result.summary.insertions}/-{result.summary.deletions}"
            + (f", {len(result.skipped_files)} skipped" if result.skipped_files else "")
        )
        return result


def extract_git_diff(
    project_path: Union[str, Path],
    spec: Optional[RevisionSpec] = None,
    ignores: Optional[IgnorePredicate] = None,
    config: Optional[AppConfig] = None,
    base_dir: Optional[Union[str, Path]] = None,
) -> DiffResultData:
    """
    Extract git diff information from a repository.

    Args:
        project_path: Path to the git repository
        spec: RevisionSpec variant (defaults to uncommitted changes)
        ignores: Optional predicate returning True for paths to exclude
        config: Optional configuration (defaults to the global configuration)
        base_dir: Trusted base directory (defaults to the configured base_dir)

    Returns:
        DiffResultData

    Raises:
        InvalidInputError: For malformed revisions or project paths
        ForbiddenError: If project_path escapes the base directory
        InternalError: For any unexpected git or environment failure
    """
    config = config or get_config()
    validated_path = validate_secure_path(project_path, base_dir or config.security.base_dir)

    try:
        backend = SubprocessGitClient(validated_path, git_binary=config.git_diff.git_binary)
        analyzer = GitDiffAnalyzer(
            backend,
            max_blob_size=config.git_diff.max_blob_size,
            batch_size=config.git_diff.batch_size,
        )
        return analyzer.extract(spec, ignores)
    except AnalyzerError as e:
        logger.error(f"Failed to extract git diff for {project_path}: {e.message}")
        raise
    except Exception as e:
        logger.error(f"Failed to extract git diff for {project_path}: {e}")
        raise InternalError(
            f"Failed to extract git diff: {e}",
            details={'original_error': str(e), 'project_path': str(project_path)},
        ) from e
