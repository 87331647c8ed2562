"""
AI Codebase Analyzer

AI 에이전트에게 코드베이스 변경사항을 안전하게 제공하는 git diff 추출 엔진
"""

__version__ = "1.0.0"

from .git.analyzer import extract_git_diff
from .api import CodebaseAnalyzerAPI

__all__ = ["CodebaseAnalyzerAPI", "extract_git_diff", "__version__"]
