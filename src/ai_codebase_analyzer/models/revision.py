"""
Revision Data Models

리비전 지정(RevisionSpec)과 비교 구간 관련 데이터 모델들
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..errors import InvalidInputError


@dataclass(frozen=True)
class Uncommitted:
    """작업 트리의 커밋되지 않은 변경사항"""

    def describe(self) -> str:
        return "uncommitted"


@dataclass(frozen=True)
class CommitCount:
    """최근 N개 커밋"""
    n: int

    def __post_init__(self):
        """데이터 검증"""
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n <= 0:
            raise InvalidInputError(
                f"Invalid count parameter: {self.n}",
                details={'count': self.n},
            )

    def describe(self) -> str:
        return f"last {self.n} commits"


@dataclass(frozen=True)
class SingleRevision:
    """단일 커밋 (첫 번째 부모와 비교)"""
    token: str

    def describe(self) -> str:
        return f"commit {self.token}"


@dataclass(frozen=True)
class Range:
    """base..head 리비전 범위"""
    base: str
    head: str

    def describe(self) -> str:
        return f"range {self.base}..{self.head}"


RevisionSpec = Union[Uncommitted, CommitCount, SingleRevision, Range]


@dataclass(frozen=True)
class ComparisonEndpoints:
    """비교 대상 양 끝점 (None은 작업 트리/인덱스 쪽)"""
    base: Optional[str]
    head: Optional[str]

    @property
    def is_uncommitted(self) -> bool:
        """작업 트리 비교 여부"""
        return self.base is None and self.head is None

    def as_args(self) -> list:
        """git diff 에 넘길 리비전 인자"""
        if self.base is not None and self.head is not None:
            return [self.base, self.head]
        return []


@dataclass(frozen=True)
class RevisionInfo:
    """사용자에게 보여줄 리비전 정보"""
    base: str
    head: str

    def to_dict(self) -> dict:
        return {'base': self.base, 'head': self.head}


@dataclass(frozen=True)
class ResolvedRevision:
    """RevisionResolver 결과"""
    endpoints: ComparisonEndpoints
    revision_info: RevisionInfo
    label: str
