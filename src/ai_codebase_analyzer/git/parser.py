"""
Diff Assembler

Splits concatenated git diff text into per-file sections and combines them
with numstat counts into FileDiffEntry objects.
"""

import re
import logging
from typing import Dict, List, Optional, Tuple

from ..models.git_diff import FileDiffEntry, FileStats, derive_status


logger = logging.getLogger(__name__)

DIFF_HEADER_PREFIX = "diff --git "

__all__ = [
    'DiffAssembler',
    'split_diff_sections',
    'extract_file_diff',
    'derive_status',
]


_SECTION_SPLIT_PATTERN = re.compile(r'(?=^diff --git )', re.MULTILINE)
_GIT_HEADER_PATTERN = re.compile(r'^diff --git a/(.+?) b/(.+)$', re.MULTILINE)


def split_diff_sections(diff_text: str) -> List[str]:
    """
    Split diff text into sections, each starting at a `diff --git` header.

    Args:
        diff_text: Concatenated diff output

    Returns:
        Non-empty sections in input order
    """
    if not diff_text:
        return []
    return [section for section in _SECTION_SPLIT_PATTERN.split(diff_text) if section.strip()]


def parse_header_paths(section: str) -> Optional[Tuple[str, str]]:
    """
    Extract the (old, new) paths from the header line of a diff section.

    Args:
        section: A single diff section

    Returns:
        Tuple of (a_path, b_path) or None if the section has no git header
    """
    first_line = section.split('\n', 1)[0]
    if first_line.startswith(DIFF_HEADER_PREFIX):
        rest = first_line[len(DIFF_HEADER_PREFIX):]
        # Identical old/new paths may contain spaces, so split by length first
        half = (len(rest) - 5) // 2
        if (
            half > 0
            and rest.startswith('a/')
            and rest[2 + half:5 + half] == ' b/'
            and rest[2:2 + half] == rest[5 + half:]
        ):
            path = rest[2:2 + half]
            return path, path

    match = _GIT_HEADER_PATTERN.search(section)
    if match:
        return match.group(1), match.group(2)
    return None


def extract_file_diff(diff_text: str, file_path: str) -> str:
    """
    Extract the diff block for a single file.

    Args:
        diff_text: The complete diff output from git
        file_path: The path of the file to extract

    Returns:
        The trimmed diff block for the file, or an empty string if not found
    """
    for section in split_diff_sections(diff_text):
        paths = parse_header_paths(section)
        if paths and file_path in paths:
            return section.strip()
    return ""


class DiffAssembler:
    """
    Builds FileDiffEntry objects from diff text and per-file statistics.

    Sections are indexed once per assembly; a section is reachable through
    either side of its header so renamed files resolve by old or new path.
    """

    def assemble(self, diff_text: str, stats: List[FileStats]) -> List[FileDiffEntry]:
        """
        Assemble per-file diff entries.

        Args:
            diff_text: Full diff text for the safe file list
            stats: Text-file statistics (binary entries already removed)

        Returns:
            FileDiffEntry per statistics record, in statistics order
        """
        index = self._index_sections(diff_text)

        entries = []
        for stat in stats:
            insertions = stat.insertions or 0
            deletions = stat.deletions or 0
            entries.append(FileDiffEntry(
                path=stat.path,
                insertions=insertions,
                deletions=deletions,
                diff=index.get(stat.path, ""),
            ))

        logger.debug(f"Assembled {len(entries)} file diff entries")
        return entries

    @staticmethod
    def drop_binary(stats: List[FileStats]) -> List[FileStats]:
        """Remove binary records (those lacking insertion/deletion counts)."""
        text_stats = [stat for stat in stats if stat.is_text]
        dropped = len(stats) - len(text_stats)
        if dropped:
            logger.debug(f"Dropped {dropped} binary files from diff summary")
        return text_stats

    @staticmethod
    def _index_sections(diff_text: str) -> Dict[str, str]:
        index: Dict[str, str] = {}
        for section in split_diff_sections(diff_text):
            paths = parse_header_paths(section)
            if not paths:
                continue
            trimmed = section.strip()
            for path in paths:
                index.setdefault(path, trimmed)
        return index
