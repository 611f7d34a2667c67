#!/usr/bin/env python3
"""
Host-side retry policy for transient failures.

The hydration pipeline never retries on its own; it surfaces transient errors
classified as retryable. This decorator lets the host re-run a whole request
with exponential backoff when that classification says it is safe.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, TypeVar

from recovery_point_table.domain.errors import HydrateError, QueryError

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)

# Type variable for generic function return type
T = TypeVar("T")


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "retry",
        "description": "Host retry policy for transient failures",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


def is_retryable(error: Exception) -> bool:
    """Check if an error was classified as transient.

    Args:
        error: The exception to check

    Returns:
        True for a retryable HydrateError, or a QueryError whose failures are all retryable
    """
    if isinstance(error, (HydrateError, QueryError)):
        return error.retryable
    return False


def with_retry(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator to retry a request with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts (default: 3)
        initial_delay: Initial delay in seconds (default: 1.0)
        max_delay: Maximum delay in seconds (default: 60.0)
        exponential_base: Base for exponential backoff (default: 2.0)

    Returns:
        Decorator function

    Example:
        @with_retry(max_attempts=5)
        def lookup() -> QueryResult:
            result = service.lookup(key, regions, sink)
            result.raise_for_failures()
            return result
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            attempt = 1
            delay = initial_delay

            while True:
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if not is_retryable(e) or attempt >= max_attempts:
                        raise

                    logger.warning(
                        f"Transient error in {func.__name__} (attempt {attempt}/{max_attempts}): {e}. "
                        f"Retrying in {delay:.1f}s..."
                    )

                    time.sleep(delay)
                    attempt += 1
                    delay = min(delay * exponential_base, max_delay)

        return wrapper

    return decorator


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
