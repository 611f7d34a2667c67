"""Shared pytest fixtures for recovery-point-table tests."""

from datetime import datetime, timezone
from typing import Any
from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

from recovery_point_table.domain.page import RecoveryPointPage
from recovery_point_table.domain.recovery_point import ItemShape, RecoveryPoint
from recovery_point_table.domain.scope import ScopeContext
from recovery_point_table.domain.vault import Vault

ACCOUNT_ID = "111122223333"
SAMPLE_ARN = "arn:aws:backup:us-east-1:111122223333:recovery-point:/my-vault/abcd-1234"


def client_error(code: str, operation: str = "DescribeRecoveryPoint") -> ClientError:
    """Build a botocore ClientError with the given error code."""
    return ClientError({"Error": {"Code": code, "Message": f"{code} raised"}}, operation)


def make_vault(name: str, region: str = "us-east-1") -> Vault:
    """Build a vault in the test account."""
    return Vault(
        name=name,
        arn=f"arn:aws:backup:{region}:{ACCOUNT_ID}:backup-vault:{name}",
        region=region,
        account_id=ACCOUNT_ID,
    )


def make_recovery_point(
    vault_name: str, rp_id: str, shape: ItemShape = ItemShape.LIST, region: str = "us-east-1"
) -> RecoveryPoint:
    """Build a recovery point whose ARN carries a '/vault/id' path."""
    return RecoveryPoint(
        shape=shape,
        recovery_point_arn=f"arn:aws:backup:{region}:{ACCOUNT_ID}:recovery-point:/{vault_name}/{rp_id}",
        backup_vault_name=vault_name,
        backup_vault_arn=f"arn:aws:backup:{region}:{ACCOUNT_ID}:backup-vault:{vault_name}",
        resource_arn=f"arn:aws:ec2:{region}:{ACCOUNT_ID}:volume/vol-{rp_id}",
        resource_type="EBS",
        status="COMPLETED",
        backup_size_in_bytes=1024,
        creation_date=datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        storage_class="WARM" if shape is ItemShape.GET else None,
    )


def make_page(items: list[RecoveryPoint], next_token: str | None = None) -> RecoveryPointPage:
    """Build a page; it is the last page when no next token is given."""
    return RecoveryPointPage(items=items, next_token=next_token, is_last_page=next_token is None)


@pytest.fixture
def scope() -> ScopeContext:
    """Execution context with a mock client.

    Returns:
        ScopeContext for us-east-1
    """
    return ScopeContext(region="us-east-1", client=Mock())


@pytest.fixture
def sample_list_item() -> dict[str, Any]:
    """RecoveryPoints entry as returned by list_recovery_points_by_backup_vault.

    Returns:
        Response dictionary
    """
    return {
        "RecoveryPointArn": SAMPLE_ARN,
        "BackupVaultName": "my-vault",
        "BackupVaultArn": f"arn:aws:backup:us-east-1:{ACCOUNT_ID}:backup-vault:my-vault",
        "ResourceArn": f"arn:aws:ec2:us-east-1:{ACCOUNT_ID}:volume/vol-123",
        "ResourceType": "EBS",
        "CreatedBy": {
            "BackupPlanId": "plan-1",
            "BackupPlanArn": f"arn:aws:backup:us-east-1:{ACCOUNT_ID}:backup-plan:plan-1",
            "BackupPlanVersion": "v1",
            "BackupRuleId": "rule-1",
        },
        "IamRoleArn": f"arn:aws:iam::{ACCOUNT_ID}:role/service-role/AWSBackupDefaultServiceRole",
        "Status": "COMPLETED",
        "CreationDate": datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        "CompletionDate": datetime(2025, 1, 1, 13, 0, 0, tzinfo=timezone.utc),
        "BackupSizeInBytes": 10 * 1024**3,
        "CalculatedLifecycle": {
            "MoveToColdStorageAt": datetime(2025, 2, 1, tzinfo=timezone.utc),
            "DeleteAt": datetime(2025, 6, 1, tzinfo=timezone.utc),
        },
        "Lifecycle": {"MoveToColdStorageAfterDays": 31, "DeleteAfterDays": 151},
        "IsEncrypted": True,
    }


@pytest.fixture
def sample_describe_response(sample_list_item: dict[str, Any]) -> dict[str, Any]:
    """describe_recovery_point response for the same recovery point.

    Returns:
        Response dictionary with the extra get-shape fields
    """
    return {
        **sample_list_item,
        "StorageClass": "WARM",
        "LastRestoreTime": datetime(2025, 3, 1, tzinfo=timezone.utc),
        "EncryptionKeyArn": f"arn:aws:kms:us-east-1:{ACCOUNT_ID}:key/key-1",
        "ResponseMetadata": {"HTTPStatusCode": 200},
    }
