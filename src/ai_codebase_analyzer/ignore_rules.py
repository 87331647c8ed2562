"""
Ignore Rules

Gitignore-like path exclusion used as the ignore predicate for diff extraction.
"""

import logging
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Union


logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILE = ".mcpignore"


@dataclass(frozen=True)
class IgnorePattern:
    """단일 ignore 패턴"""
    pattern: str
    negated: bool
    directory_only: bool
    anchored: bool

    @classmethod
    def parse(cls, raw: str) -> "IgnorePattern":
        negated = raw.startswith('!')
        body = raw[1:] if negated else raw
        directory_only = body.endswith('/')
        body = body.rstrip('/')
        anchored = '/' in body
        return cls(pattern=body.lstrip('/'), negated=negated, directory_only=directory_only, anchored=anchored)

    def matches(self, candidate: str, is_directory: bool) -> bool:
        if self.directory_only and not is_directory:
            return False
        if self.anchored:
            return _match_segments(self.pattern.split('/'), candidate.split('/'))
        return fnmatchcase(candidate.rsplit('/', 1)[-1], self.pattern)


def _match_segments(pattern_parts: List[str], path_parts: List[str]) -> bool:
    """
    Match a slash-separated pattern one path segment at a time.

    `*` and `?` never cross a `/`; a `**` segment spans zero or more
    segments, except in last position where it needs at least one.
    """
    if not pattern_parts:
        return not path_parts

    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == '**':
        if not rest:
            return bool(path_parts)
        return any(_match_segments(rest, path_parts[i:]) for i in range(len(path_parts) + 1))

    if not path_parts or not fnmatchcase(path_parts[0], head):
        return False
    return _match_segments(rest, path_parts[1:])


class IgnoreRules:
    """
    Ordered set of ignore patterns.

    The last matching pattern decides; a pattern that matches a directory
    excludes everything beneath it.
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns: List[IgnorePattern] = []
        self.add(patterns)

    def add(self, patterns: Iterable[str]) -> "IgnoreRules":
        for raw in patterns:
            line = raw.strip()
            if not line or line.startswith('#'):
                continue
            self.patterns.append(IgnorePattern.parse(line))
        return self

    @classmethod
    def from_file(cls, path: Union[str, Path], extra_patterns: Iterable[str] = ()) -> "IgnoreRules":
        """
        Load rules from an ignore file, if it exists.

        Args:
            path: Path to a .gitignore-style file
            extra_patterns: Patterns appended after the file's patterns

        Returns:
            IgnoreRules instance
        """
        rules = cls()
        ignore_file = Path(path)
        if ignore_file.is_file():
            with open(ignore_file, 'r', encoding='utf-8') as f:
                rules.add(f.read().splitlines())
            logger.debug(f"Loaded {len(rules.patterns)} ignore patterns from {ignore_file}")
        return rules.add(extra_patterns)

    def ignores(self, path: str) -> bool:
        """
        Check whether a repository-relative path is ignored.

        Args:
            path: POSIX-style path relative to the repository root

        Returns:
            True if the path should be excluded
        """
        normalized = path.replace('\\', '/').strip('/')
        if not normalized or not self.patterns:
            return False

        parts = normalized.split('/')
        candidates = [('/'.join(parts[:i]), True) for i in range(1, len(parts))]
        candidates.append((normalized, False))

        ignored = False
        for candidate, is_directory in candidates:
            for pattern in self.patterns:
                if pattern.matches(candidate, is_directory):
                    ignored = not pattern.negated
            if ignored and is_directory:
                # git never re-includes files under an excluded directory
                return True
        return ignored

    def __call__(self, path: str) -> bool:
        return self.ignores(path)

    def __len__(self) -> int:
        return len(self.patterns)
