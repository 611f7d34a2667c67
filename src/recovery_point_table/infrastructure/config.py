#!/usr/bin/env python3
"""
Configuration management for recovery-point-table.

Handles loading and validation of configuration from the environment.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "config",
        "description": "Configuration management",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


DEFAULT_REGION = "us-east-1"


def parse_regions(value: Optional[str]) -> list[str]:
    """Split a comma-separated region list.

    Args:
        value: String such as "us-east-1, eu-west-1"

    Returns:
        List of non-empty region codes
    """
    if not value:
        return []
    return [region.strip() for region in value.split(",") if region.strip()]


def _int_from_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


@dataclass
class TableConfig:
    """Settings for querying the recovery point table.

    Attributes:
        regions: Regions to enumerate (one scope per region)
        profile_name: Named AWS profile supplied by the host (optional)
        max_workers: Number of scopes processed concurrently
        page_size: MaxResults per recovery point page (None for upstream default)
    """

    regions: list[str] = field(default_factory=lambda: [DEFAULT_REGION])
    profile_name: Optional[str] = None
    max_workers: int = 10
    page_size: Optional[int] = None

    @classmethod
    def from_env(cls) -> "TableConfig":
        """Load configuration from environment variables.

        AWS_REGIONS takes precedence over AWS_REGION.

        Returns:
            TableConfig instance

        Raises:
            ValueError: If MAX_WORKERS or PAGE_SIZE is not a positive integer
        """
        regions = parse_regions(os.getenv("AWS_REGIONS")) or parse_regions(
            os.getenv("AWS_REGION")
        )

        return cls(
            regions=regions or [DEFAULT_REGION],
            profile_name=os.getenv("AWS_PROFILE") or None,
            max_workers=_int_from_env("MAX_WORKERS", 10),
            page_size=_int_from_env("PAGE_SIZE", None),
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
