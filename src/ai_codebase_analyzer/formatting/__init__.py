"""
Formatting Layer

Renders extracted changes for prompts and API responses.
"""

from .changes import ChangesFormatter

__all__ = ['ChangesFormatter']
