"""
Changes Formatter

Renders extracted diff data as the Markdown section embedded in review
prompts, or as the JSON artifact returned to agents.
"""

import json
import logging
from typing import List

from ..models.git_diff import DiffResultData, FileDiffEntry, SkippedFile


logger = logging.getLogger(__name__)


def _format_size(size: int) -> str:
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.2f} MB"
    if size >= 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size} bytes"


class ChangesFormatter:
    """
    Formats DiffResultData for prompt construction.

    Produces a summary, one block per file with its diff fenced as `diff`,
    and a warning block when files were skipped for size.
    """

    def __init__(self, max_diff_chars: int = 0):
        """
        Initialize changes formatter.

        Args:
            max_diff_chars: Per-file diff truncation limit (0 disables truncation)
        """
        self.max_diff_chars = max_diff_chars

    def to_json(self, result: DiffResultData) -> str:
        """Serialize the result as pretty-printed JSON."""
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)

    def to_markdown(self, result: DiffResultData) -> str:
        """
        Render the result as Markdown.

        Args:
            result: Extracted diff data

        Returns:
            Markdown text
        """
        sections = [self._format_summary(result)]

        if result.skipped_files:
            sections.append(self._format_skipped(result.skipped_files))

        if result.files:
            sections.append("## Changed Files")
            sections.extend(self._format_file(entry) for entry in result.files)
        else:
            sections.append("_No text changes found for the requested revision._")

        markdown = "\n\n".join(sections) + "\n"
        logger.debug(f"Rendered changes markdown ({len(markdown)} characters)")
        return markdown

    def _format_summary(self, result: DiffResultData) -> str:
        summary = result.summary
        lines = [
            "## Summary",
            "",
            f"- **Files modified:** {summary.files_modified}",
            f"- **Insertions:** +{summary.insertions}",
            f"- **Deletions:** -{summary.deletions}",
        ]
        if summary.revision_info is not None:
            lines.append(
                f"- **Revision:** `{summary.revision_info.base}` → `{summary.revision_info.head}`"
            )
        return "\n".join(lines)

    def _format_skipped(self, skipped_files: List[SkippedFile]) -> str:
        lines = [
            "> ⚠️ **Warning:** the following files were excluded from the analysis because they exceed the size limit.",
            ">",
        ]
        for skipped in skipped_files:
            lines.append(f"> - `{skipped.path}` ({_format_size(skipped.size)}): {skipped.reason}")
        return "\n".join(lines)

    def _format_file(self, entry: FileDiffEntry) -> str:
        header = f"### `{entry.path}` ({entry.status.value}, +{entry.insertions}/-{entry.deletions})"
        if not entry.diff:
            return f"{header}\n\n_No textual diff available._"

        diff = entry.diff
        if self.max_diff_chars and len(diff) > self.max_diff_chars:
            diff = diff[:self.max_diff_chars] + "\n... (truncated)"

        fence = "```"
        while fence in diff:
            fence += "`"
        return f"{header}\n\n{fence}diff\n{diff}\n{fence}"
