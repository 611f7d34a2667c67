#!/usr/bin/env python3
"""
Service for hydrating recovery points inside one scope.

Lists the vaults of a region, drives the paginated recovery point listing of
each vault to exhaustion, and resolves single recovery points by composite key.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Protocol

from recovery_point_table.domain.errors import HydrateError, MissingKeyError
from recovery_point_table.domain.page import PaginationState, RecoveryPointPage
from recovery_point_table.domain.recovery_point import ItemShape, RecoveryPoint, RecoveryPointKey
from recovery_point_table.domain.scope import ScopeContext
from recovery_point_table.domain.vault import Vault

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "hydrate_service",
        "description": "Vault enumeration, pagination and point lookups",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class BackupRepository(Protocol):
    """Protocol defining the upstream calls of the pipeline.

    Infrastructure layer must implement this protocol.
    """

    def open_scope(self, region: str) -> ScopeContext:
        """Create the execution context for a region."""
        ...

    def list_vaults(self, scope: ScopeContext) -> Iterator[Vault]:
        """Lazily list all backup vaults in a scope."""
        ...

    def list_recovery_points_page(
        self, scope: ScopeContext, vault_name: str, cursor: str | None = None
    ) -> RecoveryPointPage:
        """Fetch one page of recovery points in a vault."""
        ...

    def describe_recovery_point(self, scope: ScopeContext, key: RecoveryPointKey) -> RecoveryPoint:
        """Fetch the full detail record of one recovery point."""
        ...


@dataclass(frozen=True)
class Resolution:
    """Result of a point lookup: the item, or the ignorable error that omitted it.

    Attributes:
        item: Resolved recovery point, or None if omitted
        error: Ignorable error that caused the omission, if any
    """

    item: Optional[RecoveryPoint] = None
    error: Optional[HydrateError] = None

    @property
    def found(self) -> bool:
        """True if the lookup produced an item."""
        return self.item is not None


def validate_key(key: RecoveryPointKey) -> None:
    """Check that both fields of a composite key are present.

    Args:
        key: Composite key

    Raises:
        MissingKeyError: If backup_vault_name or recovery_point_arn is empty
    """
    if not key.backup_vault_name:
        raise MissingKeyError("backup_vault_name")
    if not key.recovery_point_arn:
        raise MissingKeyError("recovery_point_arn")


class HydrateService:
    """Application service for the per-scope stages of the pipeline."""

    def __init__(self, backup_repo: BackupRepository) -> None:
        """Initialize the hydrate service.

        Args:
            backup_repo: Repository for upstream calls
        """
        self.backup_repo = backup_repo

    def list_parents(
        self,
        scope: ScopeContext,
        vault_names: Optional[set[str]] = None,
        cancel_check: Optional[Callable[[], bool]] = None,
    ) -> Iterator[Vault]:
        """Lazily list the vaults that scope the recovery point listing.

        The vault listing is paginated lazily, so advancing it may issue a page
        request. Cancellation is checked before every advance.

        Args:
            scope: Execution context
            vault_names: Optional set of vault names to restrict to
            cancel_check: Returns True when the host has cancelled the query

        Yields:
            Vaults in upstream order
        """
        vaults = self.backup_repo.list_vaults(scope)
        while True:
            if cancel_check is not None and cancel_check():
                logger.info(f"Cancelled vault listing in {scope.region}")
                return
            vault = next(vaults, None)
            if vault is None:
                return
            if not vault.matches_any(vault_names):
                logger.debug(f"Skipping vault {vault.name} in {scope.region}: not requested")
                continue
            yield vault

    def list_recovery_points(
        self,
        scope: ScopeContext,
        vault: Vault,
        emit: Callable[[RecoveryPoint], None],
        cancel_check: Callable[[], bool],
    ) -> PaginationState:
        """Drive the recovery point listing of one vault to exhaustion.

        Each item is emitted before the next page is requested. Cancellation is
        checked before every page request.

        Args:
            scope: Execution context
            vault: Parent vault
            emit: Receives each item in page order
            cancel_check: Returns True when the host has cancelled the query

        Returns:
            EXHAUSTED after the last page, HAS_MORE if cancelled before it

        Raises:
            HydrateError: If a page request fails; remaining pages are abandoned
        """
        state = PaginationState.HAS_MORE
        cursor: Optional[str] = None
        pages = 0

        while state is PaginationState.HAS_MORE:
            if cancel_check():
                logger.info(
                    f"Cancelled listing of vault {vault.name} in {scope.region} after {pages} page(s)"
                )
                break

            page = self.backup_repo.list_recovery_points_page(scope, vault.name, cursor)
            pages += 1

            for item in page.items:
                emit(item)

            if page.is_last_page:
                state = PaginationState.EXHAUSTED
            else:
                cursor = page.next_token

        logger.debug(f"Listed vault {vault.name} in {scope.region}: {pages} page(s), state={state.value}")
        return state

    def get_recovery_point(self, scope: ScopeContext, key: RecoveryPointKey) -> Resolution:
        """Fetch exactly one recovery point by composite key.

        Args:
            scope: Execution context
            key: Composite key; both fields are mandatory

        Returns:
            Resolution with the GET-shape item, or with the ignorable error that omitted it

        Raises:
            MissingKeyError: If either key field is empty
            HydrateError: For non-ignorable upstream errors
        """
        validate_key(key)

        try:
            item = self.backup_repo.describe_recovery_point(scope, key)
        except HydrateError as e:
            if not e.ignorable:
                raise
            logger.debug(f"Omitting recovery point {key.recovery_point_arn} in {scope.region}: {e.kind.value}")
            return Resolution(error=e)

        return Resolution(item=item)

    def hydrate(self, scope: ScopeContext, item: RecoveryPoint) -> Resolution:
        """Resolve a list-shape item to its full get-shape record.

        Args:
            scope: Execution context
            item: Recovery point of either shape

        Returns:
            Resolution keeping the item's identity
        """
        if item.shape is ItemShape.GET:
            return Resolution(item=item)
        return self.get_recovery_point(scope, item.key)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
