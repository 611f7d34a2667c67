#!/usr/bin/env python3
"""
Execution context for one independent scope.

A scope is one region. Each scope carries its own backup client handle so no
session state is shared between scopes.
"""

from dataclasses import dataclass, field
from typing import Any

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "scope",
        "description": "Execution context for one region",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


@dataclass(frozen=True)
class ScopeContext:
    """Immutable execution context for one region.

    Attributes:
        region: AWS region code
        client: Backup client bound to the region (read-only to the pipeline)
    """

    region: str
    client: Any = field(repr=False, compare=False)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
