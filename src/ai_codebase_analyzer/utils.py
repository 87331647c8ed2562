"""
Shared Helpers

Failure policy for cosmetic metadata lookups lives here so it can be audited in one place.
"""

import logging
from typing import Any, Callable, TypeVar, Union


logger = logging.getLogger(__name__)

T = TypeVar("T")


def best_effort(
    operation: Callable[[], T],
    fallback: Union[T, Callable[[Exception], T]],
    description: str,
    context: Any = None,
) -> T:
    """
    Run an operation whose failure must never abort the surrounding extraction.

    Args:
        operation: Zero-argument callable to run
        fallback: Value to return on failure, or a callable receiving the exception
        description: Human-readable name of the operation for the warning log
        context: Optional extra information appended to the warning

    Returns:
        The operation result, or the fallback value if it raised
    """
    try:
        return operation()
    except Exception as e:
        suffix = f" ({context})" if context is not None else ""
        logger.warning(f"{description} failed, falling back to default{suffix}: {e}")
        if callable(fallback):
            return fallback(e)
        return fallback
