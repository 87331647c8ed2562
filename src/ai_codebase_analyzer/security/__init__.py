"""
Security Utilities

Path validation applied before any repository access.
"""

from .path_validator import validate_secure_path

__all__ = ['validate_secure_path']
