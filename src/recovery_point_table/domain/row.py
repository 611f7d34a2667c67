#!/usr/bin/env python3
"""
Materialized table row for a recovery point.

A row pairs a recovery point with its regional columns and derived columns.
Rows are immutable once built.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any

from recovery_point_table.domain.recovery_point import RecoveryPoint, RecoveryPointKey
from recovery_point_table.domain.transform import derive
from recovery_point_table.domain.vault import account_id_from_arn, partition_from_arn

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "row",
        "description": "Materialized recovery point row",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


@dataclass(frozen=True)
class RecoveryPointRow:
    """Immutable table row.

    Attributes:
        item: Recovery point in list or get shape
        region: Region the row was enumerated in
        account_id: AWS account ID from the vault or recovery point ARN
        partition: AWS partition from the vault or recovery point ARN
        title: Derived display title
        akas: Derived alternate identifiers
    """

    item: RecoveryPoint
    region: str
    account_id: str
    partition: str
    title: str
    akas: list[str]

    @classmethod
    def materialize(cls, item: RecoveryPoint, region: str) -> "RecoveryPointRow":
        """Run the transform stage and build a row.

        Args:
            item: Recovery point fetched from upstream
            region: Region the item was fetched in

        Returns:
            RecoveryPointRow

        Raises:
            MalformedArnError: If the recovery point ARN cannot produce a title
        """
        derived = derive(item)
        # EBS/EC2 snapshot ARNs leave the account field empty; the vault ARN never does
        owner_arn = item.backup_vault_arn or item.recovery_point_arn
        return cls(
            item=item,
            region=region,
            account_id=account_id_from_arn(owner_arn),
            partition=partition_from_arn(owner_arn),
            title=derived.title,
            akas=derived.akas,
        )

    @property
    def key(self) -> RecoveryPointKey:
        """Composite identity of the row."""
        return self.item.key

    def to_dict(self) -> dict[str, Any]:
        """Render every column under its column name.

        Nested objects become dictionaries. Timestamps are left as datetimes.

        Returns:
            Dictionary of column name to value
        """
        columns: dict[str, Any] = {}
        for f in fields(self.item):
            if f.name == "shape":
                continue
            value = getattr(self.item, f.name)
            columns[f.name] = asdict(value) if hasattr(value, "__dataclass_fields__") else value
        columns.update(
            {
                "title": self.title,
                "akas": list(self.akas),
                "region": self.region,
                "account_id": self.account_id,
                "partition": self.partition,
            }
        )
        return columns


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
