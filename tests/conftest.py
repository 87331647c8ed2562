"""
Shared test fixtures.

Provides an in-memory GitBackend double and a helper for building real
temporary git repositories.
"""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from ai_codebase_analyzer.config import AppConfig, GitDiffConfig, SecurityConfig
from ai_codebase_analyzer.git.client import GitCommandError
from ai_codebase_analyzer.git.interface import GitBackend
from ai_codebase_analyzer.models.git_diff import FileStats
from ai_codebase_analyzer.models.revision import ComparisonEndpoints


def make_section(path: str, added: int = 1, removed: int = 0) -> str:
    """Build a minimal `diff --git` section for a file."""
    lines = [
        f"diff --git a/{path} b/{path}",
        "index 1111111..2222222 100644",
        f"--- a/{path}",
        f"+++ b/{path}",
        f"@@ -1,{removed} +1,{added} @@",
    ]
    lines.extend(f"-old line {i}" for i in range(removed))
    lines.extend(f"+new line {i}" for i in range(added))
    return "\n".join(lines) + "\n"


class FakeGitBackend(GitBackend):
    """In-memory GitBackend that records every call."""

    def __init__(
        self,
        changed: Optional[List[str]] = None,
        stats: Optional[Dict[str, Optional[Tuple[int, int]]]] = None,
        sizes: Optional[Dict[str, int]] = None,
        has_parent: bool = True,
        branch: Optional[str] = "main",
        toplevel: str = "/nonexistent-repo",
        fail_summary: bool = False,
        fail_name_only: bool = False,
    ):
        self.changed = list(changed or [])
        self.stats = stats if stats is not None else {p: (1, 0) for p in self.changed}
        self.sizes = sizes or {}
        self.has_parent = has_parent
        self.branch = branch
        self._toplevel = toplevel
        self.fail_summary = fail_summary
        self.fail_name_only = fail_name_only
        self.calls: List[tuple] = []

    def name_only_diff(self, endpoints: ComparisonEndpoints) -> List[str]:
        self.calls.append(('name_only_diff', endpoints))
        if self.fail_name_only:
            raise GitCommandError("fatal: not a git repository", returncode=128)
        return list(self.changed)

    def diff_text(self, endpoints: ComparisonEndpoints, paths: List[str]) -> str:
        self.calls.append(('diff_text', endpoints, list(paths)))
        sections = []
        for path in paths:
            stat = self.stats.get(path)
            if stat is None:
                continue
            sections.append(make_section(path, added=stat[0], removed=stat[1]))
        return "".join(sections)

    def diff_summary(self, endpoints: ComparisonEndpoints, paths: List[str]) -> List[FileStats]:
        self.calls.append(('diff_summary', endpoints, list(paths)))
        if self.fail_summary:
            raise GitCommandError("numstat failed", returncode=1)
        result = []
        for path in paths:
            if path not in self.stats:
                continue
            stat = self.stats[path]
            if stat is None:
                result.append(FileStats(path=path, insertions=None, deletions=None, binary=True))
            else:
                result.append(FileStats(path=path, insertions=stat[0], deletions=stat[1]))
        return result

    def blob_size(self, revision: str, path: str) -> int:
        self.calls.append(('blob_size', revision, path))
        if path not in self.sizes:
            raise GitCommandError(f"fatal: path '{path}' does not exist in '{revision}'", returncode=128)
        return self.sizes[path]

    def resolve_ref(self, ref: str) -> Optional[str]:
        self.calls.append(('resolve_ref', ref))
        return "a" * 40 if self.has_parent else None

    def current_branch(self) -> str:
        self.calls.append(('current_branch',))
        if self.branch is None:
            raise GitCommandError("fatal: ambiguous argument 'HEAD'", returncode=128)
        return self.branch

    def toplevel(self) -> str:
        self.calls.append(('toplevel',))
        return self._toplevel

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


class GitRepo:
    """Helper around a real temporary git repository."""

    def __init__(self, path: Path):
        self.path = path

    def git(self, *args: str) -> str:
        result = subprocess.run(
            ['git', *args],
            cwd=str(self.path),
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()

    def write(self, rel_path: str, content) -> Path:
        full = self.path / rel_path
        full.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            full.write_bytes(content)
        else:
            full.write_text(content, encoding='utf-8')
        return full

    def commit(self, message: str, files: Dict[str, object]) -> str:
        for rel_path, content in files.items():
            if content is None:
                self.git('rm', '-q', rel_path)
            else:
                self.write(rel_path, content)
                self.git('add', rel_path)
        self.git('commit', '-q', '-m', message)
        return self.git('rev-parse', 'HEAD')


git_available = pytest.mark.skipif(shutil.which('git') is None, reason="git is not installed")


@pytest.fixture
def make_config(tmp_path):
    """Factory for an AppConfig anchored at tmp_path."""
    def _make(max_blob_size: int = 1024 * 1024, batch_size: int = 100) -> AppConfig:
        return AppConfig(
            git_diff=GitDiffConfig(max_blob_size=max_blob_size, batch_size=batch_size),
            security=SecurityConfig(base_dir=str(tmp_path)),
        )
    return _make


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """
    Repository with three commits:
    1. add a.txt
    2. modify a.txt
    3. add b.txt
    """
    monkeypatch.setenv('GIT_CEILING_DIRECTORIES', str(tmp_path))
    monkeypatch.setenv('GIT_CONFIG_NOSYSTEM', '1')
    monkeypatch.setenv('GIT_CONFIG_GLOBAL', os.devnull)

    repo_dir = tmp_path / 'repo'
    repo_dir.mkdir()
    repo = GitRepo(repo_dir)
    repo.git('init', '-q')
    repo.git('config', 'user.name', 'Test User')
    repo.git('config', 'user.email', 'test@example.com')
    repo.git('config', 'commit.gpgsign', 'false')

    repo.first_commit = repo.commit("init: add a.txt", {'a.txt': "a\n"})
    repo.commit("feat: modify a.txt", {'a.txt': "aa\n"})
    repo.commit("feat: add b.txt", {'b.txt': "b\n"})
    return repo
