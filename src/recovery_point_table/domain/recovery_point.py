#!/usr/bin/env python3
"""
Domain model for AWS Backup recovery points.

A recovery point arrives in one of two shapes: the lighter list shape returned
by ListRecoveryPointsByBackupVault, and the fuller get shape returned by
DescribeRecoveryPoint. Both are represented by one RecoveryPoint class tagged
with its ItemShape, and share a single identity extraction function.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Optional

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "recovery_point",
        "description": "Domain model for recovery points",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class ItemShape(Enum):
    """Upstream shape a recovery point was built from."""

    LIST = "list"
    GET = "get"


@dataclass(frozen=True)
class RecoveryPointKey:
    """Composite identity of a recovery point.

    Attributes:
        backup_vault_name: Name of the vault containing the recovery point
        recovery_point_arn: ARN of the recovery point
    """

    backup_vault_name: str
    recovery_point_arn: str


@dataclass(frozen=True)
class CalculatedLifecycle:
    """Timestamps at which a recovery point moves to cold storage and expires."""

    move_to_cold_storage_at: Optional[datetime] = None
    delete_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Optional[dict[str, Any]]) -> Optional["CalculatedLifecycle"]:
        if not data:
            return None
        return cls(
            move_to_cold_storage_at=data.get("MoveToColdStorageAt"),
            delete_at=data.get("DeleteAt"),
        )


@dataclass(frozen=True)
class Lifecycle:
    """Lifecycle rule the recovery point was created with, in days."""

    move_to_cold_storage_after_days: Optional[int] = None
    delete_after_days: Optional[int] = None
    opt_in_to_archive_for_supported_resources: Optional[bool] = None

    @classmethod
    def from_api(cls, data: Optional[dict[str, Any]]) -> Optional["Lifecycle"]:
        if not data:
            return None
        return cls(
            move_to_cold_storage_after_days=data.get("MoveToColdStorageAfterDays"),
            delete_after_days=data.get("DeleteAfterDays"),
            opt_in_to_archive_for_supported_resources=data.get(
                "OptInToArchiveForSupportedResources"
            ),
        )


@dataclass(frozen=True)
class CreatedBy:
    """Provenance of a recovery point: the backup plan and rule that created it."""

    backup_plan_arn: Optional[str] = None
    backup_plan_id: Optional[str] = None
    backup_plan_version: Optional[str] = None
    backup_rule_id: Optional[str] = None

    @classmethod
    def from_api(cls, data: Optional[dict[str, Any]]) -> Optional["CreatedBy"]:
        if not data:
            return None
        return cls(
            backup_plan_arn=data.get("BackupPlanArn"),
            backup_plan_id=data.get("BackupPlanId"),
            backup_plan_version=data.get("BackupPlanVersion"),
            backup_rule_id=data.get("BackupRuleId"),
        )


@dataclass(frozen=True)
class RecoveryPoint:
    """Immutable domain model representing an AWS Backup recovery point.

    Attributes:
        shape: Upstream shape this instance was built from
        recovery_point_arn: Unique ARN identifier
        backup_vault_name: Name of the backup vault containing this recovery point
        backup_vault_arn: ARN of the backup vault
        resource_arn: ARN of the resource that was backed up
        resource_type: Type of resource (e.g., EBS, RDS, EFS)
        status: Status as supplied upstream (COMPLETED, PARTIAL, DELETING, EXPIRED, ...)
        status_message: Explanation for a deletion failure
        backup_size_in_bytes: Size of the backup in bytes
        creation_date: When the recovery point was created
        completion_date: When the job that created it completed
        last_restore_time: When the recovery point was last restored
        encryption_key_arn: KMS key protecting the backup
        iam_role_arn: IAM role used to create the recovery point
        is_encrypted: Whether the recovery point is encrypted
        source_backup_vault_arn: Vault the resource was originally backed up in
        storage_class: WARM, COLD or DELETED (get shape only)
        calculated_lifecycle: Cold storage and deletion timestamps
        created_by: Backup plan provenance
        lifecycle: Lifecycle rule in days
    """

    shape: ItemShape
    recovery_point_arn: str
    backup_vault_name: str
    backup_vault_arn: Optional[str] = None
    resource_arn: Optional[str] = None
    resource_type: Optional[str] = None
    status: Optional[str] = None
    status_message: Optional[str] = None
    backup_size_in_bytes: Optional[int] = None
    creation_date: Optional[datetime] = None
    completion_date: Optional[datetime] = None
    last_restore_time: Optional[datetime] = None
    encryption_key_arn: Optional[str] = None
    iam_role_arn: Optional[str] = None
    is_encrypted: bool = False
    source_backup_vault_arn: Optional[str] = None
    storage_class: Optional[str] = None
    calculated_lifecycle: Optional[CalculatedLifecycle] = None
    created_by: Optional[CreatedBy] = None
    lifecycle: Optional[Lifecycle] = None

    @classmethod
    def from_list_item(cls, data: dict[str, Any], vault_name: str) -> "RecoveryPoint":
        """Build a list-shape recovery point from a RecoveryPoints entry.

        Args:
            data: One entry of the list_recovery_points_by_backup_vault response
            vault_name: Name of the vault that was listed

        Returns:
            RecoveryPoint with shape LIST
        """
        return cls._from_api(ItemShape.LIST, data, data.get("BackupVaultName") or vault_name)

    @classmethod
    def from_describe_response(cls, data: dict[str, Any]) -> "RecoveryPoint":
        """Build a get-shape recovery point from a describe_recovery_point response.

        Args:
            data: describe_recovery_point response

        Returns:
            RecoveryPoint with shape GET
        """
        return cls._from_api(ItemShape.GET, data, data["BackupVaultName"])

    @classmethod
    def _from_api(cls, shape: ItemShape, data: dict[str, Any], vault_name: str) -> "RecoveryPoint":
        return cls(
            shape=shape,
            recovery_point_arn=data["RecoveryPointArn"],
            backup_vault_name=vault_name,
            backup_vault_arn=data.get("BackupVaultArn"),
            resource_arn=data.get("ResourceArn"),
            resource_type=data.get("ResourceType"),
            status=data.get("Status"),
            status_message=data.get("StatusMessage"),
            backup_size_in_bytes=data.get("BackupSizeInBytes"),
            creation_date=data.get("CreationDate"),
            completion_date=data.get("CompletionDate"),
            last_restore_time=data.get("LastRestoreTime"),
            encryption_key_arn=data.get("EncryptionKeyArn"),
            iam_role_arn=data.get("IamRoleArn"),
            is_encrypted=data.get("IsEncrypted", False),
            source_backup_vault_arn=data.get("SourceBackupVaultArn"),
            # StorageClass is only part of the describe response
            storage_class=data.get("StorageClass") if shape is ItemShape.GET else None,
            calculated_lifecycle=CalculatedLifecycle.from_api(data.get("CalculatedLifecycle")),
            created_by=CreatedBy.from_api(data.get("CreatedBy")),
            lifecycle=Lifecycle.from_api(data.get("Lifecycle")),
        )

    @property
    def key(self) -> RecoveryPointKey:
        """Composite identity of this recovery point."""
        return identity(self)

    def populated_columns(self) -> set[str]:
        """Names of attributes that carry a value.

        Returns:
            Set of attribute names whose value is not None
        """
        return {f.name for f in fields(self) if f.name != "shape" and getattr(self, f.name) is not None}


def identity(item: RecoveryPoint) -> RecoveryPointKey:
    """Extract the composite identity of a recovery point of either shape.

    Args:
        item: Recovery point

    Returns:
        RecoveryPointKey
    """
    return RecoveryPointKey(
        backup_vault_name=item.backup_vault_name,
        recovery_point_arn=item.recovery_point_arn,
    )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
