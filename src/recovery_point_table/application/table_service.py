#!/usr/bin/env python3
"""
Service for querying the recovery point table.

Fans a full scan or a point lookup out across regions on a thread pool and
streams finished rows to the host's sink. A failure in one region or vault is
recorded on the QueryResult and never stops its siblings.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Optional

from recovery_point_table.application.hydrate_service import (
    BackupRepository,
    HydrateService,
    validate_key,
)
from recovery_point_table.application.row_sink import RowSink
from recovery_point_table.application.scope_expander import ScopeExpander
from recovery_point_table.domain.errors import ErrorKind, HydrateError
from recovery_point_table.domain.query_result import QueryResult
from recovery_point_table.domain.recovery_point import RecoveryPoint, RecoveryPointKey
from recovery_point_table.domain.row import RecoveryPointRow
from recovery_point_table.domain.scope import ScopeContext
from recovery_point_table.infrastructure.logger import log_operation

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "table_service",
        "description": "Full scans and point lookups across regions",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


def _never_cancelled() -> bool:
    return False


@dataclass
class TableQuery:
    """A request from the host.

    Attributes:
        regions: Regions supplied by the host
        key: Composite key for a point lookup, or None for a full scan
        vault_names: Optional vault names to restrict a full scan to
        region_filter: Optional subset of regions requested by the query
        hydrate_details: Resolve every listed item to its full record during a scan
    """

    regions: list[str]
    key: Optional[RecoveryPointKey] = None
    vault_names: Optional[set[str]] = None
    region_filter: Optional[set[str]] = None
    hydrate_details: bool = False

    @property
    def is_point_lookup(self) -> bool:
        """True if the query carries a key."""
        return self.key is not None


class TableService:
    """Application service that executes table queries."""

    def __init__(self, backup_repo: BackupRepository, max_workers: int = 10) -> None:
        """Initialize the table service.

        Args:
            backup_repo: Repository for upstream calls
            max_workers: Number of regions processed concurrently
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.expander = ScopeExpander(backup_repo)
        self.hydrator = HydrateService(backup_repo)
        self.max_workers = max_workers

    def execute(
        self,
        query: TableQuery,
        sink: RowSink,
        cancel_check: Callable[[], bool] | None = None,
    ) -> QueryResult:
        """Run a query through the point lookup or full scan path.

        Args:
            query: Host request
            sink: Receives finished rows
            cancel_check: Returns True when the host cancels the query

        Returns:
            QueryResult for the query
        """
        if query.is_point_lookup:
            return self.lookup(
                query.key,
                query.regions,
                sink,
                region_filter=query.region_filter,
                cancel_check=cancel_check,
            )
        return self.scan(
            query.regions,
            sink,
            vault_names=query.vault_names,
            region_filter=query.region_filter,
            hydrate_details=query.hydrate_details,
            cancel_check=cancel_check,
        )

    def scan(
        self,
        regions: list[str],
        sink: RowSink,
        vault_names: Optional[set[str]] = None,
        region_filter: Optional[set[str]] = None,
        hydrate_details: bool = False,
        cancel_check: Callable[[], bool] | None = None,
    ) -> QueryResult:
        """Enumerate every recovery point in every vault of every region.

        Args:
            regions: Regions supplied by the host
            sink: Receives finished rows
            vault_names: Optional vault names to restrict to
            region_filter: Optional subset of regions
            hydrate_details: Resolve each listed item to its full record
            cancel_check: Returns True when the host cancels the query

        Returns:
            QueryResult for the scan
        """
        cancel_check = cancel_check or _never_cancelled
        result = QueryResult()

        def scan_scope(region: str) -> None:
            scope = self.expander.open(region)
            for vault in self.hydrator.list_parents(scope, vault_names, cancel_check):

                def emit(item: RecoveryPoint) -> None:
                    self._emit_listed(scope, item, sink, result, hydrate_details, cancel_check)

                try:
                    self.hydrator.list_recovery_points(scope, vault, emit, cancel_check)
                except HydrateError as e:
                    result.record_error(e.with_context(region=region, vault_name=vault.name))

        log_operation(
            logger,
            "Starting full scan",
            {"regions": ",".join(regions), "hydrate_details": hydrate_details},
            level=logging.DEBUG,
        )
        self._run_scopes(self.expander.expand(regions, region_filter), scan_scope, result, cancel_check)
        return result

    def lookup(
        self,
        key: RecoveryPointKey,
        regions: list[str],
        sink: RowSink,
        region_filter: Optional[set[str]] = None,
        cancel_check: Callable[[], bool] | None = None,
    ) -> QueryResult:
        """Fetch one recovery point by composite key in every region.

        Regions that do not hold the recovery point answer NotFoundException,
        which is ignorable.

        Args:
            key: Composite key; both fields are mandatory
            regions: Regions supplied by the host
            sink: Receives the finished row
            region_filter: Optional subset of regions
            cancel_check: Returns True when the host cancels the query

        Returns:
            QueryResult for the lookup

        Raises:
            MissingKeyError: If either key field is empty
        """
        validate_key(key)
        cancel_check = cancel_check or _never_cancelled
        result = QueryResult()

        def lookup_scope(region: str) -> None:
            scope = self.expander.open(region)
            if cancel_check():
                return
            resolution = self.hydrator.get_recovery_point(scope, key)
            if resolution.error is not None:
                result.record_error(resolution.error)
            if resolution.found:
                self._emit_row(scope, resolution.item, sink, result)

        log_operation(
            logger,
            "Starting point lookup",
            {"vault": key.backup_vault_name, "arn": key.recovery_point_arn},
            level=logging.DEBUG,
        )
        self._run_scopes(self.expander.expand(regions, region_filter), lookup_scope, result, cancel_check)
        return result

    def _emit_listed(
        self,
        scope: ScopeContext,
        item: RecoveryPoint,
        sink: RowSink,
        result: QueryResult,
        hydrate_details: bool,
        cancel_check: Callable[[], bool],
    ) -> None:
        """Finish one listed item: optionally resolve its detail, then emit its row."""
        if hydrate_details:
            if cancel_check():
                return
            resolution = self.hydrator.hydrate(scope, item)
            if not resolution.found:
                result.record_error(resolution.error)
                return
            item = resolution.item

        self._emit_row(scope, item, sink, result)

    def _emit_row(
        self, scope: ScopeContext, item: RecoveryPoint, sink: RowSink, result: QueryResult
    ) -> None:
        try:
            row = RecoveryPointRow.materialize(item, scope.region)
        except HydrateError as e:
            e.with_context(region=scope.region, vault_name=item.backup_vault_name)
            raise
        sink.emit(row)
        result.record_row()

    def _run_scopes(
        self,
        regions: list[str],
        worker: Callable[[str], None],
        result: QueryResult,
        cancel_check: Callable[[], bool],
    ) -> None:
        """Run a worker once per region on a thread pool, isolating failures.

        Args:
            regions: Expanded regions
            worker: Per-region unit of work
            result: Collects failures of each region
            cancel_check: Returns True when the host cancels the query
        """
        if not regions:
            return

        workers = min(self.max_workers, len(regions))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ScopeWorker") as executor:
            futures = {executor.submit(worker, region): region for region in regions}

            for future in as_completed(futures):
                region = futures[future]
                try:
                    future.result()
                    logger.debug(f"Finished region {region}")
                except HydrateError as e:
                    result.record_error(e.with_context(region=region))
                except Exception as e:
                    logger.error(f"Unexpected error processing region {region}: {e}")
                    result.record_error(
                        HydrateError(
                            f"Unexpected error: {e}",
                            kind=ErrorKind.FATAL,
                            operation="scope",
                            region=region,
                            error_code=type(e).__name__,
                        )
                    )

        if cancel_check():
            result.mark_cancelled()


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
