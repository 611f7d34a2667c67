#!/usr/bin/env python3
"""
One page of a cursor-based recovery point listing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from recovery_point_table.domain.recovery_point import RecoveryPoint

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "page",
        "description": "Page of a paginated recovery point listing",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class PaginationState(Enum):
    """Cursor state of one listing."""

    HAS_MORE = "has_more"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class RecoveryPointPage:
    """A page returned by the upstream listing call.

    Attributes:
        items: Recovery points in upstream order
        next_token: Continuation cursor for the next page, if any
        is_last_page: True when the upstream signals no further pages
    """

    items: list[RecoveryPoint] = field(default_factory=list)
    next_token: Optional[str] = None
    is_last_page: bool = True


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
