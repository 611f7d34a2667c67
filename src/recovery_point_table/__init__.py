#!/usr/bin/env python3
"""
recovery-point-table: AWS Backup recovery points exposed as table rows.

This package enumerates recovery points per region and per backup vault, resolves
targeted lookups by composite key, and overlays derived display columns so a host
query engine can stream the results as rows.
"""

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "__init__",
        "description": "Package initialization for recovery-point-table",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }
