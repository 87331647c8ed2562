"""
Git Subprocess Client

Runs git as a subprocess for the read-only queries used by diff extraction.
Arguments are always passed as a list and never routed through a shell.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from ..models.git_diff import FileStats
from ..models.revision import ComparisonEndpoints
from .interface import GitBackend


logger = logging.getLogger(__name__)

# Truncation limit for git output echoed into debug logs
LOG_OUTPUT_LIMIT = 2000


class GitCommandError(Exception):
    """Git command related errors"""
    def __init__(self, message: str, args: Optional[List[str]] = None,
                 returncode: Optional[int] = None, stderr: Optional[str] = None):
        super().__init__(message)
        self.command_args = args or []
        self.returncode = returncode
        self.stderr = stderr


def pathspec(path: str) -> str:
    """
    Turn a repository-relative path into an exact git pathspec.

    Paths from `--name-only` are relative to the repository root and may
    contain glob characters, so they are anchored at the top and matched
    literally regardless of the working directory.
    """
    return f":(top,literal){path}"


class SubprocessGitClient(GitBackend):
    """
    Git client backed by the git command line.

    Provides methods for:
    - Name-only, text and numstat diffs for a comparison
    - Blob size lookup without loading blob content
    - Ref resolution and current branch lookup
    """

    def __init__(self, repo_path: Union[str, Path], git_binary: str = "git"):
        """
        Initialize git client.

        Args:
            repo_path: Path to the repository (already validated by the caller)
            git_binary: Name or path of the git executable
        """
        self.repo_path = Path(repo_path)
        self.git_binary = git_binary

    def _run(self, args: List[str]) -> str:
        """
        Run a git command and return its standard output.

        Args:
            args: Arguments passed to git

        Returns:
            Decoded standard output

        Raises:
            GitCommandError: If git is missing or exits with a non-zero status
        """
        # quotepath=off keeps non-ASCII paths byte-identical to the index
        cmd = [self.git_binary, "-c", "core.quotepath=off"] + args
        logger.debug(f"Running git command: {' '.join(cmd)} cwd={self.repo_path}")

        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.repo_path),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            logger.debug(f"Git command failed: {' '.join(cmd)} code={e.returncode} stderr={stderr[:LOG_OUTPUT_LIMIT]}")
            raise GitCommandError(
                f"git {' '.join(args)} failed with exit code {e.returncode}: {stderr}",
                args=args,
                returncode=e.returncode,
                stderr=stderr,
            ) from e
        except OSError as e:
            raise GitCommandError(f"Unable to run git: {e}", args=args) from e

        if len(result.stdout) > LOG_OUTPUT_LIMIT:
            logger.debug(f"git stdout: {len(result.stdout)} characters")
        return result.stdout

    def name_only_diff(self, endpoints: ComparisonEndpoints) -> List[str]:
        output = self._run(['diff', '--name-only', '--no-renames', *endpoints.as_args()])
        return [line for line in output.split('\n') if line.strip()]

    def diff_text(self, endpoints: ComparisonEndpoints, paths: List[str]) -> str:
        return self._run([
            'diff', '--no-renames', '--no-color', '--no-ext-diff', *endpoints.as_args(), '--', *map(pathspec, paths)
        ])

    def diff_summary(self, endpoints: ComparisonEndpoints, paths: List[str]) -> List[FileStats]:
        output = self._run(['diff', '--numstat', '--no-renames', *endpoints.as_args(), '--', *map(pathspec, paths)])
        return parse_numstat(output)

    def blob_size(self, revision: str, path: str) -> int:
        output = self._run(['cat-file', '-s', f'{revision}:{path}'])
        return int(output.strip())

    def resolve_ref(self, ref: str) -> Optional[str]:
        """
        Resolve a ref to a commit hash.

        Args:
            ref: Revision expression (already validated)

        Returns:
            Full commit hash or None if the ref does not name a commit
        """
        try:
            output = self._run(['rev-parse', '--verify', '--quiet', f'{ref}^{{commit}}'])
        except GitCommandError as e:
            # --quiet exits 1 without output for unknown refs
            if e.returncode == 1:
                return None
            raise
        return output.strip() or None

    def current_branch(self) -> str:
        return self._run(['rev-parse', '--abbrev-ref', 'HEAD']).strip()

    def toplevel(self) -> str:
        return self._run(['rev-parse', '--show-toplevel']).strip()


def parse_numstat(output: str) -> List[FileStats]:
    """
    Parse `git diff --numstat` output.

    Args:
        output: Raw numstat output

    Returns:
        FileStats per line; binary files carry None counts
    """
    stats = []
    for line in output.split('\n'):
        if not line.strip():
            continue
        parts = line.split('\t', 2)
        if len(parts) != 3:
            logger.debug(f"Skipping unparsable numstat line: {line}")
            continue

        insertions, deletions, path = parts
        if insertions == '-' and deletions == '-':
            stats.append(FileStats(path=path, insertions=None, deletions=None, binary=True))
        else:
            stats.append(FileStats(path=path, insertions=int(insertions), deletions=int(deletions)))
    return stats
