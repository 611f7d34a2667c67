#!/usr/bin/env python3
"""
AWS Backup repository implementation.

Provides the upstream calls of the hydration pipeline using boto3. Every botocore
failure is converted into a classified HydrateError.
"""

import logging
from typing import Any, Iterator, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as BotoConnectionError

from recovery_point_table.domain.errors import (
    DESCRIBE_RECOVERY_POINT,
    LIST_BACKUP_VAULTS,
    LIST_RECOVERY_POINTS,
    ErrorKind,
    HydrateError,
    classify_error,
)
from recovery_point_table.domain.page import RecoveryPointPage
from recovery_point_table.domain.recovery_point import RecoveryPoint, RecoveryPointKey
from recovery_point_table.domain.scope import ScopeContext
from recovery_point_table.domain.vault import Vault

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)

OPEN_SCOPE = "open_scope"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "aws_backup_repository",
        "description": "AWS Backup repository implementation",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


def to_hydrate_error(operation: str, error: Exception, **context: Optional[str]) -> HydrateError:
    """Convert a botocore exception into a classified HydrateError.

    Args:
        operation: Upstream operation that failed
        error: ClientError or BotoCoreError raised by boto3
        **context: region, vault_name, recovery_point_arn, cursor

    Returns:
        HydrateError carrying the classification and context
    """
    if isinstance(error, ClientError):
        error_code = error.response.get("Error", {}).get("Code", "")
        kind = classify_error(operation, error_code)
    elif isinstance(error, (BotoConnectionError, HTTPClientError)):
        error_code = type(error).__name__
        kind = ErrorKind.TRANSIENT
    else:
        error_code = type(error).__name__
        kind = ErrorKind.FATAL

    return HydrateError(str(error), kind=kind, operation=operation, error_code=error_code, **context)


class AWSBackupRepository:
    """Repository for AWS Backup read operations using boto3.

    Implements the BackupRepository protocol of the hydrate service.
    """

    def __init__(
        self,
        profile_name: str | None = None,
        page_size: int | None = None,
        vault_page_size: int = 1000,
    ) -> None:
        """Initialize AWS Backup repository.

        Args:
            profile_name: Optional named profile supplied by the host
            page_size: MaxResults per recovery point page (None for upstream default)
            vault_page_size: Page size for vault listing
        """
        self.profile_name = profile_name
        self.page_size = page_size
        self.vault_page_size = vault_page_size

    def open_scope(self, region: str) -> ScopeContext:
        """Create the execution context for one region.

        Each call builds a fresh session and client; nothing is cached.

        Args:
            region: AWS region

        Returns:
            ScopeContext with a backup client bound to the region
        """
        try:
            session = boto3.Session(profile_name=self.profile_name, region_name=region)
            client = session.client("backup")
        except BotoCoreError as e:
            raise to_hydrate_error(OPEN_SCOPE, e, region=region) from e

        logger.debug(f"Opened backup client for region {region}")
        return ScopeContext(region=region, client=client)

    def list_vaults(self, scope: ScopeContext) -> Iterator[Vault]:
        """Lazily list all backup vaults in a scope.

        Args:
            scope: Execution context

        Yields:
            Vault domain objects in upstream order
        """
        paginator = scope.client.get_paginator("list_backup_vaults")
        try:
            for page in paginator.paginate(PaginationConfig={"PageSize": self.vault_page_size}):
                for vault_data in page.get("BackupVaultList", []):
                    yield Vault.from_api(vault_data, scope.region)
        except (ClientError, BotoCoreError) as e:
            raise to_hydrate_error(LIST_BACKUP_VAULTS, e, region=scope.region) from e

    def list_recovery_points_page(
        self, scope: ScopeContext, vault_name: str, cursor: str | None = None
    ) -> RecoveryPointPage:
        """Fetch one page of recovery points in a vault.

        Args:
            scope: Execution context
            vault_name: Name of backup vault
            cursor: Continuation token from the previous page (None for the first page)

        Returns:
            RecoveryPointPage with items, next token and last page flag
        """
        params: dict[str, Any] = {"BackupVaultName": vault_name}
        if cursor:
            params["NextToken"] = cursor
        if self.page_size:
            params["MaxResults"] = self.page_size

        try:
            response = scope.client.list_recovery_points_by_backup_vault(**params)
        except (ClientError, BotoCoreError) as e:
            raise to_hydrate_error(
                LIST_RECOVERY_POINTS, e, region=scope.region, vault_name=vault_name, cursor=cursor
            ) from e

        next_token = response.get("NextToken")
        return RecoveryPointPage(
            items=[
                RecoveryPoint.from_list_item(rp_data, vault_name)
                for rp_data in response.get("RecoveryPoints", [])
            ],
            next_token=next_token,
            is_last_page=not next_token,
        )

    def describe_recovery_point(self, scope: ScopeContext, key: RecoveryPointKey) -> RecoveryPoint:
        """Fetch the full detail record of one recovery point.

        Args:
            scope: Execution context
            key: Composite key of the recovery point

        Returns:
            RecoveryPoint with shape GET
        """
        try:
            response = scope.client.describe_recovery_point(
                BackupVaultName=key.backup_vault_name,
                RecoveryPointArn=key.recovery_point_arn,
            )
        except (ClientError, BotoCoreError) as e:
            raise to_hydrate_error(
                DESCRIBE_RECOVERY_POINT,
                e,
                region=scope.region,
                vault_name=key.backup_vault_name,
                recovery_point_arn=key.recovery_point_arn,
            ) from e

        # Fall back to the requested vault when the response carries no vault name
        return RecoveryPoint.from_describe_response(
            {"BackupVaultName": key.backup_vault_name, **response}
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
