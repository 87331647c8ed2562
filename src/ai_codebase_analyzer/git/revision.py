"""
Revision Resolver

Parses revision specifications into concrete comparison endpoints.
Every externally supplied token is checked against an allow-list before
it can reach a git subprocess.
"""

import logging
import re
from typing import Optional

from ..errors import InvalidInputError, invalid_revision
from ..models.revision import (
    CommitCount,
    ComparisonEndpoints,
    Range,
    ResolvedRevision,
    RevisionInfo,
    RevisionSpec,
    SingleRevision,
    Uncommitted,
)
from ..utils import best_effort
from .interface import GitBackend


logger = logging.getLogger(__name__)

# Git's well-known hash of the empty tree
EMPTY_TREE_HASH = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

UNCOMMITTED_SENTINEL = "."
WORKING_DIRECTORY_LABEL = "working directory"

# No leading hyphen (flag injection) and no shell metacharacters
_REVISION_PATTERN = re.compile(r'(?!-)[A-Za-z0-9~^./_-]+')


def validate_revision(revision: str) -> bool:
    """
    Validate a revision string against the allow-list.

    Args:
        revision: Revision token (commit hash, branch, HEAD~n, a..b)

    Returns:
        True if the token is safe to pass to git
    """
    if not isinstance(revision, str):
        return False
    return _REVISION_PATTERN.fullmatch(revision) is not None


def _require_valid(token: str) -> str:
    if not validate_revision(token):
        raise invalid_revision(token)
    return token


def parse_revision_spec(revision: Optional[str] = None, count: Optional[int] = None) -> RevisionSpec:
    """
    Convert the `{revision, count}` request form into a RevisionSpec variant.

    Args:
        revision: "." for uncommitted changes, a commit, or a base..head range
        count: Number of most recent commits

    Returns:
        Exactly one RevisionSpec variant

    Raises:
        InvalidInputError: For malformed tokens, ranges or counts
    """
    if revision == UNCOMMITTED_SENTINEL:
        return Uncommitted()

    if count is not None:
        return CommitCount(count)

    if revision is None or revision == "":
        return Uncommitted()

    _require_valid(revision)

    if ".." in revision:
        base, head = revision.split("..", 1)
        base, head = base.strip(), head.strip()
        if not validate_revision(base) or not validate_revision(head):
            raise InvalidInputError(
                f"Invalid revision range format: {revision}",
                details={'revision': revision},
            )
        return Range(base=base, head=head)

    return SingleRevision(token=revision)


class RevisionResolver:
    """
    Resolves a RevisionSpec into comparison endpoints and display info.

    Single revisions are compared against their first parent, falling back
    to the empty tree when the revision has no parent.
    """

    def __init__(self, backend: GitBackend):
        self.backend = backend

    def resolve(self, spec: RevisionSpec) -> ResolvedRevision:
        """
        Resolve a revision specification.

        Args:
            spec: RevisionSpec variant

        Returns:
            ResolvedRevision with endpoints, revision info and a log label

        Raises:
            InvalidInputError: If any token fails validation
        """
        if isinstance(spec, Uncommitted):
            return self._resolve_uncommitted()
        if isinstance(spec, CommitCount):
            return self._resolve_commit_count(spec)
        if isinstance(spec, Range):
            return self._resolve_range(spec)
        if isinstance(spec, SingleRevision):
            return self._resolve_single(spec)
        raise InvalidInputError(f"Unsupported revision specification: {spec!r}")

    def _resolve_uncommitted(self) -> ResolvedRevision:
        logger.debug("Extracting uncommitted changes")

        branch = best_effort(
            lambda: self.backend.current_branch() or "HEAD",
            "HEAD",
            "Current branch resolution",
        )
        return ResolvedRevision(
            endpoints=ComparisonEndpoints(base=None, head=None),
            revision_info=RevisionInfo(base=branch, head=WORKING_DIRECTORY_LABEL),
            label="uncommitted",
        )

    def _resolve_commit_count(self, spec: CommitCount) -> ResolvedRevision:
        if not validate_revision(str(spec.n)):
            raise InvalidInputError(f"Invalid count parameter: {spec.n}", details={'count': spec.n})

        logger.debug(f"Extracting last {spec.n} commits")

        base, head = f"HEAD~{spec.n}", "HEAD"
        return ResolvedRevision(
            endpoints=ComparisonEndpoints(base=base, head=head),
            revision_info=RevisionInfo(base=base, head=head),
            label=spec.describe(),
        )

    def _resolve_range(self, spec: Range) -> ResolvedRevision:
        base = _require_valid(spec.base.strip())
        head = _require_valid(spec.head.strip())

        logger.debug(f"Extracting diff for range {base}..{head}")

        return ResolvedRevision(
            endpoints=ComparisonEndpoints(base=base, head=head),
            revision_info=RevisionInfo(base=base, head=head),
            label=f"range {base}..{head}",
        )

    def _resolve_single(self, spec: SingleRevision) -> ResolvedRevision:
        token = _require_valid(spec.token)
        parent = f"{token}^1"

        logger.debug(f"Extracting diff for specific revision {token}")

        if self.backend.resolve_ref(parent) is None:
            logger.debug(f"Revision {token} has no parent, diffing against the empty tree")
            return ResolvedRevision(
                endpoints=ComparisonEndpoints(base=EMPTY_TREE_HASH, head=token),
                revision_info=RevisionInfo(base=EMPTY_TREE_HASH, head=token),
                label=f"first commit {token}",
            )

        return ResolvedRevision(
            endpoints=ComparisonEndpoints(base=parent, head=token),
            revision_info=RevisionInfo(base=parent, head=token),
            label=spec.describe(),
        )
