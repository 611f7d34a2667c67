#!/usr/bin/env python3
"""
Domain model for AWS Backup vaults.

A vault is the parent resource that scopes the recovery point listing.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "vault",
        "description": "Domain model for backup vaults",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


@dataclass(frozen=True)
class Vault:
    """Immutable domain model representing an AWS Backup vault.

    Attributes:
        name: Vault name
        arn: Vault ARN
        region: AWS region where vault exists
        account_id: AWS account ID, taken from the vault ARN
        recovery_point_count: Number of recovery points in vault
        encryption_key_arn: KMS key ARN used for encryption (optional)
        creation_date: When the vault was created (optional)
        locked: Whether a vault lock is in place
    """

    name: str
    arn: str
    region: str
    account_id: str
    recovery_point_count: int = 0
    encryption_key_arn: Optional[str] = None
    creation_date: Optional[datetime] = None
    locked: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any], region: str) -> "Vault":
        """Build a vault from a BackupVaultList entry.

        Args:
            data: One entry of the list_backup_vaults response
            region: Region the vault was listed in

        Returns:
            Vault instance
        """
        arn = data["BackupVaultArn"]
        return cls(
            name=data["BackupVaultName"],
            arn=arn,
            region=region,
            account_id=account_id_from_arn(arn),
            recovery_point_count=data.get("NumberOfRecoveryPoints", 0),
            encryption_key_arn=data.get("EncryptionKeyArn"),
            creation_date=data.get("CreationDate"),
            locked=data.get("Locked", False),
        )

    def matches_any(self, names: Optional[set[str]]) -> bool:
        """Check if vault name is in a set of requested names.

        Args:
            names: Requested vault names, or None for no restriction

        Returns:
            True if no restriction is given or the name is in the set
        """
        return names is None or self.name in names


def account_id_from_arn(arn: str) -> str:
    """Extract the account ID field of an ARN.

    Args:
        arn: ARN such as arn:aws:backup:us-east-1:123456789012:backup-vault:main

    Returns:
        Account ID, or empty string if the ARN has no account field
    """
    parts = arn.split(":")
    return parts[4] if len(parts) > 4 else ""


def partition_from_arn(arn: str) -> str:
    """Extract the partition field of an ARN.

    Args:
        arn: ARN string

    Returns:
        Partition (e.g., "aws", "aws-cn"), or empty string if absent
    """
    parts = arn.split(":")
    return parts[1] if len(parts) > 1 else ""


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
