#!/usr/bin/env python3
"""
Logging configuration for recovery-point-table.

Provides structured logging with appropriate levels for CLI and library usage.
"""

import logging
import sys
from typing import Any

from recovery_point_table.domain.query_result import QueryResult

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "logger",
        "description": "Logging configuration",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


def setup_logger(name: str = "recovery_point_table", verbose: bool = False) -> logging.Logger:
    """Configure and return a logger instance.

    Logs go to stderr so that rows printed on stdout stay machine-readable.

    Args:
        name: Logger name
        verbose: If True, set level to DEBUG; otherwise INFO

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG if verbose else logging.INFO)

        # Format: timestamp - name - level - message
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)

    return logger


def log_operation(
    logger: logging.Logger,
    operation: str,
    details: dict[str, Any] | None = None,
    level: int = logging.INFO,
) -> None:
    """Log an operation with structured details.

    Args:
        logger: Logger instance
        operation: Operation description
        details: Optional dictionary of details
        level: Logging level
    """
    message = f"{operation}"
    if details:
        detail_str = ", ".join(f"{k}={v}" for k, v in details.items())
        message = f"{message} ({detail_str})"

    logger.log(level, message)


def log_query_result(logger: logging.Logger, result: QueryResult) -> None:
    """Log the outcome of a table query.

    Fatal failures are logged at ERROR with their location, ignored errors at DEBUG.

    Args:
        logger: Logger instance
        result: Query outcome
    """
    for error in result.ignored:
        logger.debug(f"Omitted row: {error}")
    for failure in result.failures:
        logger.error(f"Failed: {failure}")

    log_operation(
        logger,
        "Query finished",
        {
            "rows": result.rows_emitted,
            "ignored": len(result.ignored),
            "failures": len(result.failures),
            "cancelled": result.cancelled,
        },
        level=logging.WARNING if result.failures else logging.INFO,
    )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
