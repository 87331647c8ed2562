"""
Property-based tests for extracted diff results.

Property: summary totals always equal the per-file sums, statuses follow
the line counts, and every input file lands in exactly one bucket.
"""

from hypothesis import given, strategies as st

from ai_codebase_analyzer.git.analyzer import GitDiffAnalyzer
from ai_codebase_analyzer.models.git_diff import FileStatus, derive_status
from ai_codebase_analyzer.models.revision import Range

from conftest import FakeGitBackend


MAX_BLOB_SIZE = 1000

file_strategy = st.fixed_dictionaries({
    'stat': st.one_of(st.none(), st.tuples(st.integers(0, 200), st.integers(0, 200))),
    'size': st.integers(min_value=0, max_value=2 * MAX_BLOB_SIZE),
    'ignored': st.booleans(),
})


class TestDiffResultInvariants:
    """Property tests for DiffResultData produced by the analyzer."""

    @given(insertions=st.integers(0, 10_000), deletions=st.integers(0, 10_000))
    def test_status_derivation(self, insertions, deletions):
        """
        Property: Status is a pure function of the line counts.
        """
        status = derive_status(insertions, deletions)

        if insertions > 0 and deletions == 0:
            assert status == FileStatus.ADDED
        elif deletions > 0 and insertions == 0:
            assert status == FileStatus.DELETED
        else:
            assert status == FileStatus.MODIFIED

    @given(files=st.lists(file_strategy, max_size=30))
    def test_extraction_invariants(self, files):
        """
        Property: Totals, skipped files and binary handling stay consistent.

        Given: Changed files with random sizes, line counts, binary and ignore flags
        When: The diff is extracted
        Then: Summary totals equal per-file sums, oversized files are reported
              as skipped, and binary or ignored files appear nowhere
        """
        paths = [f"file_{i}.txt" for i in range(len(files))]
        stats = {path: spec['stat'] for path, spec in zip(paths, files)}
        sizes = {path: spec['size'] for path, spec in zip(paths, files)}
        ignored = {path for path, spec in zip(paths, files) if spec['ignored']}

        backend = FakeGitBackend(changed=paths, stats=stats, sizes=sizes)
        result = GitDiffAnalyzer(backend, max_blob_size=MAX_BLOB_SIZE, batch_size=7).extract(
            Range("main", "feature"), ignores=lambda p: p in ignored
        )

        assert result.summary.files_modified == len(result.files)
        assert result.summary.insertions == sum(f.insertions for f in result.files)
        assert result.summary.deletions == sum(f.deletions for f in result.files)

        returned = {f.path for f in result.files}
        skipped = {s.path for s in result.skipped_files}
        assert not returned & skipped
        assert not (returned | skipped) & ignored

        for path in paths:
            if path in ignored:
                continue
            if sizes[path] > MAX_BLOB_SIZE:
                assert path in skipped
            elif stats[path] is None:
                assert path not in returned
            else:
                assert path in returned

        for entry in result.files:
            assert entry.status == derive_status(entry.insertions, entry.deletions)
            assert entry.diff.startswith(f"diff --git a/{entry.path} b/{entry.path}")
