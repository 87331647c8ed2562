"""
Secure Path Validator

Validates project paths against a trusted base directory before any
filesystem or git operation is performed.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..errors import ForbiddenError, InvalidInputError


logger = logging.getLogger(__name__)


def _is_within(path: Path, base: Path) -> bool:
    try:
        path.relative_to(base)
        return True
    except ValueError:
        return False


def validate_secure_path(project_path: Union[str, Path], base_dir: Optional[Union[str, Path]] = None) -> Path:
    """
    Validate and resolve a project path securely.

    Args:
        project_path: Project path to validate (relative or absolute)
        base_dir: Trusted base directory (defaults to the configured base_dir)

    Returns:
        The normalized, validated absolute path

    Raises:
        InvalidInputError: If the path is empty, missing, or not a directory
        ForbiddenError: If the path escapes the base directory
    """
    if project_path is None or str(project_path).strip() == "":
        raise InvalidInputError("Project path must not be empty")
    if '\x00' in str(project_path):
        raise InvalidInputError("Project path contains a null byte", details={'path': repr(project_path)})

    if base_dir is None:
        from ..config import get_config
        base_dir = get_config().security.base_dir

    base = Path(base_dir).resolve()
    resolved = (base / Path(project_path)).resolve()

    if not _is_within(resolved, base):
        logger.warning(
            f"Path traversal attempt detected: original={project_path} resolved={resolved} base={base}"
        )
        raise ForbiddenError(
            f"Path traversal detected. Project path must be within the working directory. Path: '{project_path}'",
            details={'path': str(project_path)},
        )

    if not resolved.exists():
        logger.warning(f"Path does not exist or is inaccessible: {resolved}")
        raise InvalidInputError(
            f"Project path does not exist or is inaccessible: {project_path}",
            details={'path': str(project_path)},
        )

    if not resolved.is_dir():
        raise InvalidInputError(
            f"Project path is not a directory: {project_path}",
            details={'path': str(project_path)},
        )

    logger.debug(f"Path validated successfully: {project_path} -> {resolved}")
    return resolved
