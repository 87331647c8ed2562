#!/usr/bin/env python3
"""
Change Extraction Demo

Demonstrates how to extract a size-bounded git diff from a local
repository and render it for a review prompt.

Usage:
    python examples/extract_changes_demo.py <project_path> [revision | -n COUNT]

Example:
    python examples/extract_changes_demo.py . HEAD~3..HEAD
    python examples/extract_changes_demo.py . -n 2
"""

import sys
import os
import logging

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from ai_codebase_analyzer.api import CodebaseAnalyzerAPI, ChangesRequest
from ai_codebase_analyzer.config import AppConfig
from ai_codebase_analyzer.errors import AnalyzerError


def setup_logging():
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def parse_args(argv):
    """Parse `<project_path> [revision | -n COUNT]`."""
    if len(argv) < 2 or len(argv) > 4:
        print("Usage: python extract_changes_demo.py <project_path> [revision | -n COUNT]")
        sys.exit(1)

    project_path = argv[1]
    revision, count = None, None

    if len(argv) == 4 and argv[2] == '-n':
        try:
            count = int(argv[3])
        except ValueError:
            print("Error: COUNT must be an integer")
            sys.exit(1)
    elif len(argv) == 3:
        revision = argv[2]
    elif len(argv) != 2:
        print("Usage: python extract_changes_demo.py <project_path> [revision | -n COUNT]")
        sys.exit(1)

    return project_path, revision, count


def main():
    """Main demo function."""
    setup_logging()
    logger = logging.getLogger(__name__)

    project_path, revision, count = parse_args(sys.argv)
    project_path = os.path.abspath(project_path)

    # Trust the parent of the requested project
    config = AppConfig.from_env()
    config.security.base_dir = os.path.dirname(project_path)

    try:
        api = CodebaseAnalyzerAPI(config)
        result = api.extract_changes(ChangesRequest(
            project_path=project_path,
            revision=revision,
            count=count,
        ))
    except AnalyzerError as e:
        logger.error(f"Extraction failed: {e.message}")
        print(f"Error [{e.code.value}]: {e.message}")
        sys.exit(1)

    summary = result.result.summary
    print(f"\n📊 Diff Summary:")
    print(f"   Revision: {summary.revision_info.base} → {summary.revision_info.head}")
    print(f"   Files: {summary.files_modified}")
    print(f"   Insertions: +{summary.insertions}")
    print(f"   Deletions: -{summary.deletions}")

    print(f"\n📄 File Details:")
    for i, entry in enumerate(result.result.files[:10], 1):  # Show first 10 files
        print(f"   {i}. {entry.path} ({entry.status.value}, +{entry.insertions}/-{entry.deletions})")

    if len(result.result.files) > 10:
        print(f"   ... and {len(result.result.files) - 10} more files")

    if result.result.skipped_files:
        print(f"\n⚠️ Skipped Files:")
        for skipped in result.result.skipped_files:
            print(f"   - {skipped.path}: {skipped.reason}")

    print(f"\n📝 Markdown preview:\n")
    print(result.markdown[:2000])

    print(f"\n✅ Demo completed in {result.processing_time:.2f}s")


if __name__ == '__main__':
    main()
