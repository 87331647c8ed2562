"""
Data Models

git diff 추출 시스템의 핵심 데이터 모델들
"""

from .revision import (
    Uncommitted,
    CommitCount,
    SingleRevision,
    Range,
    RevisionSpec,
    ComparisonEndpoints,
    RevisionInfo,
    ResolvedRevision,
)
from .git_diff import (
    FileStatus,
    derive_status,
    FileStats,
    SkippedFile,
    FileDiffEntry,
    DiffSummary,
    DiffResultData,
    IncludeChangesRequest,
)

__all__ = [
    "Uncommitted",
    "CommitCount",
    "SingleRevision",
    "Range",
    "RevisionSpec",
    "ComparisonEndpoints",
    "RevisionInfo",
    "ResolvedRevision",
    "FileStatus",
    "derive_status",
    "FileStats",
    "SkippedFile",
    "FileDiffEntry",
    "DiffSummary",
    "DiffResultData",
    "IncludeChangesRequest",
]
