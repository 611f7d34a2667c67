#!/usr/bin/env python3
"""
Scope expansion for the hydration pipeline.

Turns the host-supplied region list into independent execution contexts.
"""

import logging
from typing import Iterable, Optional, Protocol

from recovery_point_table.domain.scope import ScopeContext

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "scope_expander",
        "description": "Expands regions into execution contexts",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class ScopeFactory(Protocol):
    """Protocol for building the client handle of one scope."""

    def open_scope(self, region: str) -> ScopeContext:
        """Create the execution context for a region.

        Args:
            region: AWS region

        Returns:
            ScopeContext with its own client
        """
        ...


class ScopeExpander:
    """Expands a region list into one execution context per region."""

    def __init__(self, factory: ScopeFactory) -> None:
        """Initialize the scope expander.

        Args:
            factory: Builds the client handle for each scope
        """
        self.factory = factory

    def expand(
        self, regions: Iterable[str], region_filter: Optional[set[str]] = None
    ) -> list[str]:
        """Resolve the regions a query must run in.

        Args:
            regions: Host-supplied regions
            region_filter: Optional subset requested by the query

        Returns:
            Distinct regions in first-seen order

        Raises:
            ValueError: If a region name is blank
        """
        expanded: list[str] = []
        for region in regions:
            if not region or not region.strip():
                raise ValueError("Region names must be non-empty")
            region = region.strip()
            if region in expanded:
                continue
            if region_filter is not None and region not in region_filter:
                logger.debug(f"Skipping region {region}: excluded by region filter")
                continue
            expanded.append(region)
        return expanded

    def open(self, region: str) -> ScopeContext:
        """Build the execution context for one region.

        Called from inside the scope's own worker so that a failure here only
        affects that scope.

        Args:
            region: AWS region

        Returns:
            ScopeContext
        """
        return self.factory.open_scope(region)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
