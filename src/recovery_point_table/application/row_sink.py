#!/usr/bin/env python3
"""
Row stream sinks: the boundary between the pipeline and the host.

Rows are accepted in arrival order. Scope workers emit concurrently, so every
sink serializes its own emits.
"""

import threading
from typing import Callable, Protocol

from recovery_point_table.domain.row import RecoveryPointRow

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "row_sink",
        "description": "Row stream sinks",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class RowSink(Protocol):
    """Protocol for receiving completed rows."""

    def emit(self, row: RecoveryPointRow) -> None:
        """Accept one completed row.

        Args:
            row: Row that has passed the transform stage
        """
        ...


class CollectingSink:
    """Sink that keeps every row in arrival order."""

    def __init__(self) -> None:
        self._rows: list[RecoveryPointRow] = []
        self._lock = threading.Lock()

    def emit(self, row: RecoveryPointRow) -> None:
        with self._lock:
            self._rows.append(row)

    @property
    def rows(self) -> list[RecoveryPointRow]:
        """Snapshot of the rows received so far."""
        with self._lock:
            return list(self._rows)


class CallbackSink:
    """Sink that hands each row to a callback, one at a time."""

    def __init__(self, callback: Callable[[RecoveryPointRow], None]) -> None:
        """Initialize the sink.

        Args:
            callback: Called once per row, never concurrently
        """
        self._callback = callback
        self._lock = threading.Lock()

    def emit(self, row: RecoveryPointRow) -> None:
        with self._lock:
            self._callback(row)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
