"""
Unit tests for ChangesFormatter.
"""

import json

from ai_codebase_analyzer.formatting import ChangesFormatter
from ai_codebase_analyzer.models.git_diff import DiffResultData, FileDiffEntry, SkippedFile
from ai_codebase_analyzer.models.revision import RevisionInfo

from conftest import make_section


def build_result(skipped=None, files=None) -> DiffResultData:
    if files is None:
        files = [
            FileDiffEntry(path="src/app.py", insertions=2, deletions=1, diff=make_section("src/app.py", 2, 1).strip()),
            FileDiffEntry(path="README.md", insertions=1, deletions=0, diff=make_section("README.md").strip()),
        ]
    return DiffResultData.from_entries(
        files,
        revision_info=RevisionInfo(base="HEAD~1", head="HEAD"),
        skipped_files=skipped or [],
    )


class TestChangesFormatter:
    """Unit tests for ChangesFormatter."""

    def setup_method(self):
        self.formatter = ChangesFormatter()

    def test_markdown_summary_and_files(self):
        markdown = self.formatter.to_markdown(build_result())

        assert markdown.startswith("## Summary")
        assert "- **Files modified:** 2" in markdown
        assert "- **Insertions:** +3" in markdown
        assert "- **Deletions:** -1" in markdown
        assert "`HEAD~1` → `HEAD`" in markdown
        assert "## Changed Files" in markdown
        assert "### `src/app.py` (modified, +2/-1)" in markdown
        assert "### `README.md` (added, +1/-0)" in markdown
        assert markdown.count("```diff") == 2
        assert "Warning" not in markdown

    def test_markdown_skipped_warning(self):
        skipped = [SkippedFile(path="assets/video.mp4", size=3 * 1024 * 1024, reason="too large")]

        markdown = self.formatter.to_markdown(build_result(skipped=skipped))

        assert "⚠️ **Warning:**" in markdown
        assert "> - `assets/video.mp4` (3.00 MB): too large" in markdown
        assert markdown.index("Warning") < markdown.index("## Changed Files")

    def test_markdown_without_changes(self):
        markdown = self.formatter.to_markdown(build_result(files=[]))

        assert "- **Files modified:** 0" in markdown
        assert "_No text changes found for the requested revision._" in markdown
        assert "## Changed Files" not in markdown

    def test_entry_without_diff_text(self):
        files = [FileDiffEntry(path="gone.py", insertions=0, deletions=4, diff="")]

        markdown = self.formatter.to_markdown(build_result(files=files))

        assert "### `gone.py` (deleted, +0/-4)" in markdown
        assert "_No textual diff available._" in markdown

    def test_truncation(self):
        long_diff = "diff --git a/x b/x\n" + "+line\n" * 100
        files = [FileDiffEntry(path="x", insertions=100, deletions=0, diff=long_diff)]

        markdown = ChangesFormatter(max_diff_chars=50).to_markdown(build_result(files=files))

        assert "... (truncated)" in markdown
        assert markdown.count("+line") < 100

    def test_fence_is_longer_than_backticks_in_diff(self):
        files = [FileDiffEntry(path="doc.md", insertions=1, deletions=0, diff="+```python")]

        markdown = self.formatter.to_markdown(build_result(files=files))

        assert "````diff" in markdown

    def test_json(self):
        data = json.loads(self.formatter.to_json(build_result()))

        assert data['summary']['filesModified'] == 2
        assert data['summary']['revisionInfo'] == {'base': "HEAD~1", 'head': "HEAD"}
        assert [f['status'] for f in data['files']] == ["modified", "added"]
        assert 'skippedFiles' not in data
