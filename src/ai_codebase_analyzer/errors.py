"""
Error Taxonomy

Typed errors surfaced to callers of the analyzer.
Every error carries a machine-readable code and optional details.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes shared by the core and the API layer"""
    INVALID_INPUT = "INVALID_INPUT"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AnalyzerError(Exception):
    """
    Base exception for all analyzer errors.

    Callers receive exactly one of these instead of a partial result.
    """

    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, code: Optional[ErrorCode] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize an AnalyzerError.

        Args:
            message: Main error message for the caller
            code: Error code (defaults to the class-level code)
            details: Additional structured details
        """
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for API responses."""
        return {
            'code': self.code.value,
            'message': self.message,
            'details': self.details,
        }


class InvalidInputError(AnalyzerError):
    """Malformed revision token, malformed range or non-positive commit count."""
    code = ErrorCode.INVALID_INPUT


class ForbiddenError(AnalyzerError):
    """Path traversal outside the trusted base directory."""
    code = ErrorCode.FORBIDDEN


class InternalError(AnalyzerError):
    """Unexpected failure of the version-control layer or the environment."""
    code = ErrorCode.INTERNAL_ERROR


def invalid_revision(revision: str) -> InvalidInputError:
    """Create an InvalidInputError for a revision token rejected by the allow-list."""
    return InvalidInputError(
        f"Invalid characters in revision string: {revision}. "
        "Revision must contain only alphanumeric characters and git revision symbols (~, ^, ., /, -, _).",
        details={'revision': revision},
    )
