#!/usr/bin/env python3
"""
Outcome of one table query.

Collects per-unit failures so that a failing region or vault never hides the
rows produced by its siblings.
"""

import threading
from dataclasses import dataclass, field
from typing import Any

from recovery_point_table.domain.errors import HydrateError, QueryError

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "query_result",
        "description": "Outcome of one table query",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


@dataclass
class QueryResult:
    """Thread-safe accumulator for the outcome of a query.

    Attributes:
        rows_emitted: Number of rows delivered to the sink
        ignored: Ignorable errors that caused rows to be omitted
        failures: Fatal errors, one per failed scope, vault or key
        cancelled: Whether the host cancelled the query
    """

    rows_emitted: int = 0
    ignored: list[HydrateError] = field(default_factory=list)
    failures: list[HydrateError] = field(default_factory=list)
    cancelled: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_row(self) -> None:
        """Count one emitted row."""
        with self._lock:
            self.rows_emitted += 1

    def record_error(self, error: HydrateError) -> None:
        """Record an error as ignored or failed according to its kind.

        Args:
            error: Classified error
        """
        with self._lock:
            if error.ignorable:
                self.ignored.append(error)
            else:
                self.failures.append(error)

    def mark_cancelled(self) -> None:
        """Flag the query as cancelled by the host."""
        with self._lock:
            self.cancelled = True

    @property
    def succeeded(self) -> bool:
        """True if no fatal failure was recorded."""
        return not self.failures

    def raise_for_failures(self) -> None:
        """Raise a QueryError naming every fatal failure.

        Raises:
            QueryError: If any fatal failure was recorded
        """
        if self.failures:
            raise QueryError(list(self.failures))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation
        """
        return {
            "rows_emitted": self.rows_emitted,
            "ignored_count": len(self.ignored),
            "failures": [failure.to_dict() for failure in self.failures],
            "cancelled": self.cancelled,
        }


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
