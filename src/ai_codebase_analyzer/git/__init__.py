"""
Git Integration Layer

This module provides secure git diff extraction: revision resolution,
size-bounded file filtering, batched diff retrieval and per-file assembly.
"""

from .analyzer import GitDiffAnalyzer, extract_git_diff
from .client import GitCommandError, SubprocessGitClient
from .interface import GitBackend
from .revision import EMPTY_TREE_HASH, RevisionResolver, parse_revision_spec, validate_revision

__all__ = [
    'GitDiffAnalyzer',
    'extract_git_diff',
    'GitBackend',
    'GitCommandError',
    'SubprocessGitClient',
    'EMPTY_TREE_HASH',
    'RevisionResolver',
    'parse_revision_spec',
    'validate_revision',
]
