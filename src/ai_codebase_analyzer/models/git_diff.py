"""
Git Diff Data Models

git diff 추출 결과 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator

from .revision import RevisionInfo, RevisionSpec


class FileStatus(str, Enum):
    """파일 변경 상태"""
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"


def derive_status(insertions: int, deletions: int) -> FileStatus:
    """삽입/삭제 수치로부터 상태 도출"""
    if insertions > 0 and deletions == 0:
        return FileStatus.ADDED
    if deletions > 0 and insertions == 0:
        return FileStatus.DELETED
    return FileStatus.MODIFIED


@dataclass(frozen=True)
class FileStats:
    """git diff --numstat 의 파일별 통계 (바이너리는 None)"""
    path: str
    insertions: Optional[int]
    deletions: Optional[int]
    binary: bool = False

    @property
    def is_text(self) -> bool:
        """삽입/삭제 수치가 있는 텍스트 파일 여부"""
        return not self.binary and self.insertions is not None and self.deletions is not None


@dataclass(frozen=True)
class SkippedFile:
    """크기 제한으로 제외된 파일"""
    path: str
    size: int
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {'path': self.path, 'size': self.size, 'reason': self.reason}


@dataclass(frozen=True)
class FileDiffEntry:
    """파일별 diff 결과"""
    path: str
    insertions: int
    deletions: int
    diff: str

    def __post_init__(self):
        """데이터 검증"""
        if self.insertions < 0 or self.deletions < 0:
            raise ValueError("Insertion and deletion counts must be non-negative")

    @property
    def status(self) -> FileStatus:
        return derive_status(self.insertions, self.deletions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'status': self.status.value,
            'insertions': self.insertions,
            'deletions': self.deletions,
            'diff': self.diff,
        }


@dataclass(frozen=True)
class DiffSummary:
    """diff 요약"""
    files_modified: int
    insertions: int
    deletions: int
    revision_info: Optional[RevisionInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'filesModified': self.files_modified,
            'insertions': self.insertions,
            'deletions': self.deletions,
        }
        if self.revision_info is not None:
            data['revisionInfo'] = self.revision_info.to_dict()
        return data


@dataclass(frozen=True)
class DiffResultData:
    """git diff 추출의 최종 결과"""
    summary: DiffSummary
    files: List[FileDiffEntry]
    skipped_files: List[SkippedFile] = field(default_factory=list)

    def __post_init__(self):
        """데이터 검증"""
        if self.summary.files_modified != len(self.files):
            raise ValueError("files_modified must equal the number of files")
        if self.summary.insertions != sum(f.insertions for f in self.files):
            raise ValueError("Total insertions must equal the sum over files")
        if self.summary.deletions != sum(f.deletions for f in self.files):
            raise ValueError("Total deletions must equal the sum over files")

    @classmethod
    def from_entries(
        cls,
        files: List[FileDiffEntry],
        revision_info: Optional[RevisionInfo] = None,
        skipped_files: Optional[List[SkippedFile]] = None,
    ) -> "DiffResultData":
        """파일 목록에서 합계를 계산하여 결과 생성"""
        summary = DiffSummary(
            files_modified=len(files),
            insertions=sum(f.insertions for f in files),
            deletions=sum(f.deletions for f in files),
            revision_info=revision_info,
        )
        return cls(summary=summary, files=list(files), skipped_files=list(skipped_files or []))

    @property
    def has_skipped_files(self) -> bool:
        return bool(self.skipped_files)

    def to_dict(self) -> Dict[str, Any]:
        """JSON 직렬화용 딕셔너리 (skippedFiles 는 비어 있으면 생략)"""
        data: Dict[str, Any] = {
            'summary': self.summary.to_dict(),
            'files': [f.to_dict() for f in self.files],
        }
        if self.skipped_files:
            data['skippedFiles'] = [s.to_dict() for s in self.skipped_files]
        return data


# Pydantic models for API validation
class IncludeChangesRequest(BaseModel):
    """API 요청용 변경사항 지정 모델"""
    revision: Optional[str] = None
    count: Optional[int] = None

    @field_validator('revision')
    @classmethod
    def validate_revision(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Revision must not be blank')
        return v

    @field_validator('count')
    @classmethod
    def validate_count(cls, v):
        if v is not None and v <= 0:
            raise ValueError('Count must be positive')
        return v

    def to_spec(self) -> RevisionSpec:
        """RevisionSpec 변형으로 변환"""
        from ..git.revision import parse_revision_spec

        return parse_revision_spec(revision=self.revision, count=self.count)
