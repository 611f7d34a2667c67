#!/usr/bin/env python3
"""
Derived display columns for recovery point rows.

Computes title and akas from data that was already fetched. Never performs I/O.
"""

from dataclasses import dataclass

from recovery_point_table.domain.errors import MalformedArnError
from recovery_point_table.domain.recovery_point import RecoveryPoint

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "transform",
        "description": "Derived columns for recovery point rows",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


@dataclass(frozen=True)
class DerivedColumns:
    """Display-only columns computed per row.

    Attributes:
        title: Segment of the recovery point ARN following the first '/'
        akas: Alternate identifiers for the row
    """

    title: str
    akas: list[str]


def recovery_point_title(arn: str) -> str:
    """Take the path segment at index 1 of a recovery point ARN.

    Args:
        arn: Recovery point ARN (e.g., arn:aws:backup:...:recovery-point:/my-vault/abcd)

    Returns:
        Title segment (e.g., "my-vault")

    Raises:
        MalformedArnError: If the ARN has fewer than 2 '/'-delimited segments
    """
    segments = arn.split("/")
    if len(segments) < 2:
        raise MalformedArnError(arn)
    return segments[1]


def arn_to_akas(arn: str) -> list[str]:
    """Wrap an ARN in the alternate-identifier list format.

    Args:
        arn: ARN string

    Returns:
        Single-element list with the normalized ARN
    """
    return [arn.strip()]


def derive(item: RecoveryPoint) -> DerivedColumns:
    """Compute derived columns for a recovery point of either shape.

    Args:
        item: Recovery point

    Returns:
        DerivedColumns for the row
    """
    return DerivedColumns(
        title=recovery_point_title(item.recovery_point_arn),
        akas=arn_to_akas(item.recovery_point_arn),
    )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
