"""
Main Codebase Analyzer API

Main interface that turns a change request into extracted diff data
and the rendered section consumed by review prompts.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from . import __version__
from .config import AppConfig, get_config
from .errors import InvalidInputError
from .formatting.changes import ChangesFormatter
from .git.analyzer import extract_git_diff
from .ignore_rules import IgnoreRules
from .models.git_diff import DiffResultData, IncludeChangesRequest
from .security.path_validator import validate_secure_path


logger = logging.getLogger(__name__)


@dataclass
class ChangesRequest:
    """Request for change extraction."""
    project_path: str
    revision: Optional[str] = None
    count: Optional[int] = None
    ignore_patterns: List[str] = field(default_factory=list)


@dataclass
class ChangesResult:
    """Result of change extraction."""
    request_id: str
    project_path: str
    status: str
    result: DiffResultData
    markdown: str
    processing_time: float
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'request_id': self.request_id,
            'project_path': self.project_path,
            'status': self.status,
            'result': self.result.to_dict(),
            'processing_time': self.processing_time,
            'created_at': self.created_at.isoformat(),
        }


class CodebaseAnalyzerAPI:
    """
    Main Codebase Analyzer API interface.

    Orchestrates change extraction:
    1. Validate the request and the project path
    2. Build the ignore predicate for the project
    3. Extract the size-bounded git diff
    4. Render the changes for prompt construction
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Initialize Codebase Analyzer API.

        Args:
            config: Optional configuration object
        """
        self.config = config or get_config()
        self.formatter = ChangesFormatter()
        logger.info("Codebase Analyzer API initialized successfully")

    def build_ignore_rules(self, project_path: Path, extra_patterns: Optional[List[str]] = None) -> IgnoreRules:
        """
        Build the ignore predicate for a project.

        Args:
            project_path: Validated project path
            extra_patterns: Request-specific patterns

        Returns:
            IgnoreRules combining the project's ignore file, configured and request patterns
        """
        patterns = list(self.config.ignore.patterns) + list(extra_patterns or [])
        return IgnoreRules.from_file(project_path / self.config.ignore.ignore_file, patterns)

    def extract_changes(self, request: ChangesRequest) -> ChangesResult:
        """
        Extract changes for a request.

        Args:
            request: ChangesRequest with project path and revision selection

        Returns:
            ChangesResult with structured data and rendered Markdown
        """
        start_time = time.monotonic()
        created_at = datetime.now()
        request_id = f"changes_{int(created_at.timestamp() * 1000)}"

        logger.info(
            f"Extracting changes: {request_id} (revision={request.revision}, count={request.count})"
        )

        try:
            include_changes = IncludeChangesRequest(revision=request.revision, count=request.count)
        except ValidationError as e:
            raise InvalidInputError(
                f"Invalid change request: {e.errors()[0]['msg']}",
                details={'revision': request.revision, 'count': request.count},
            ) from e

        spec = include_changes.to_spec()
        base_dir = self.config.security.base_dir
        project_path = validate_secure_path(request.project_path, base_dir)
        ignores = self.build_ignore_rules(project_path, request.ignore_patterns)

        result = extract_git_diff(
            project_path,
            spec,
            ignores=ignores if len(ignores) else None,
            config=self.config,
            base_dir=base_dir,
        )

        processing_time = time.monotonic() - start_time
        logger.info(f"Changes extracted: {request_id} in {processing_time:.2f}s")

        return ChangesResult(
            request_id=request_id,
            project_path=str(project_path),
            status="completed",
            result=result,
            markdown=self.formatter.to_markdown(result),
            processing_time=processing_time,
            created_at=created_at,
        )

    def health(self) -> Dict[str, Any]:
        """Service health information."""
        return {
            'status': 'healthy',
            'service': 'ai-codebase-analyzer',
            'version': __version__,
        }
