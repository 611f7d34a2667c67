#!/usr/bin/env python3
"""
CLI entry point for recovery-point-table.

Acts as a minimal host for the hydration pipeline: reads configuration, builds
a full scan or point lookup request, and prints rows as they arrive.
"""

import argparse
import json
import sys
from datetime import datetime
from typing import Any, Callable, NoReturn, Optional

from recovery_point_table.application.row_sink import CallbackSink
from recovery_point_table.application.table_service import TableQuery, TableService
from recovery_point_table.domain.errors import HydrateError, QueryError
from recovery_point_table.domain.query_result import QueryResult
from recovery_point_table.domain.recovery_point import RecoveryPointKey
from recovery_point_table.domain.row import RecoveryPointRow
from recovery_point_table.infrastructure.aws_backup_repository import AWSBackupRepository
from recovery_point_table.infrastructure.config import TableConfig, parse_regions
from recovery_point_table.infrastructure.logger import log_query_result, setup_logger
from recovery_point_table.infrastructure.retry import with_retry
from recovery_point_table.infrastructure.signal_handler import ShutdownCoordinator

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "cli",
        "description": "Command-line interface for recovery-point-table",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="recovery-point-table",
        description="Query AWS Backup recovery points as table rows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--regions",
        help="Comma-separated regions to query (default: AWS_REGIONS, AWS_REGION or us-east-1)",
    )

    parser.add_argument(
        "--profile",
        help="Named AWS profile to use (default: AWS_PROFILE)",
    )

    parser.add_argument(
        "--workers",
        type=int,
        help="Number of regions queried concurrently (default: MAX_WORKERS or 10)",
    )

    parser.add_argument(
        "--page-size",
        type=int,
        help="Recovery points requested per page (default: PAGE_SIZE or service default)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List recovery points in every vault of every region",
    )
    list_parser.add_argument(
        "--vault",
        action="append",
        dest="vaults",
        help="Restrict to a vault name (repeatable; lists all vaults if not specified)",
    )
    list_parser.add_argument(
        "--details",
        action="store_true",
        help="Fetch the full record of every recovery point",
    )

    # get command
    get_parser = subparsers.add_parser(
        "get",
        help="Get one recovery point by vault name and ARN",
    )
    get_parser.add_argument(
        "--vault",
        required=True,
        help="Backup vault name",
    )
    get_parser.add_argument(
        "--arn",
        required=True,
        help="Recovery point ARN",
    )
    get_parser.add_argument(
        "--retries",
        type=int,
        default=3,
        help="Attempts for throttled or unavailable lookups (default: 3)",
    )

    return parser


def load_config(args: argparse.Namespace) -> TableConfig:
    """Build configuration from the environment, overridden by CLI flags.

    Args:
        args: Parsed command-line arguments

    Returns:
        TableConfig instance
    """
    config = TableConfig.from_env()
    if args.regions:
        config.regions = parse_regions(args.regions)
    if args.profile:
        config.profile_name = args.profile
    if args.workers is not None:
        config.max_workers = args.workers
    if args.page_size is not None:
        config.page_size = args.page_size
    return config


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def print_row(row: RecoveryPointRow, output: str) -> None:
    """Print one row as soon as it arrives.

    Args:
        row: Finished row
        output: "text" or "json" (one JSON object per line)
    """
    if output == "json":
        print(json.dumps(row.to_dict(), default=_json_default))
    else:
        rp = row.item
        print(f"Recovery Point: {rp.recovery_point_arn}")
        print(f"  Title: {row.title}")
        print(f"  Vault: {rp.backup_vault_name}")
        print(f"  Region: {row.region}")
        print(f"  Resource: {rp.resource_arn} ({rp.resource_type})")
        print(f"  Status: {rp.status}")
        print(f"  Created: {rp.creation_date}")
        print(f"  Size: {rp.backup_size_in_bytes} bytes")
        if rp.storage_class:
            print(f"  Storage Class: {rp.storage_class}")
        print()
    sys.stdout.flush()


def _run_query(
    args: argparse.Namespace,
    query: TableQuery,
    config: TableConfig,
    on_row: Optional[Callable[[RecoveryPointRow], None]] = None,
) -> QueryResult:
    logger = setup_logger(verbose=args.verbose)

    shutdown_coordinator = ShutdownCoordinator()
    shutdown_coordinator.register_shutdown_callback(
        lambda: logger.warning("Cancellation requested, stopping before the next request")
    )
    shutdown_coordinator.setup_signal_handlers()

    try:
        backup_repo = AWSBackupRepository(
            profile_name=config.profile_name, page_size=config.page_size
        )
        service = TableService(backup_repo, max_workers=config.max_workers)
        sink = CallbackSink(on_row or (lambda row: print_row(row, args.output)))
        result = service.execute(query, sink, cancel_check=shutdown_coordinator.is_shutdown_requested)
    finally:
        shutdown_coordinator.restore_signal_handlers()

    log_query_result(logger, result)
    return result


def cmd_list(args: argparse.Namespace) -> int:
    """Execute list command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger = setup_logger(verbose=args.verbose)

    try:
        config = load_config(args)
        logger.info(f"Listing recovery points in regions: {', '.join(config.regions)}")
        if args.vaults:
            logger.info(f"  Filtering for vaults: {', '.join(args.vaults)}")

        query = TableQuery(
            regions=config.regions,
            vault_names=set(args.vaults) if args.vaults else None,
            hydrate_details=args.details,
        )
        result = _run_query(args, query, config)
        return 0 if result.succeeded else 1

    except (ValueError, HydrateError) as e:
        logger.error(f"Error listing recovery points: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


def cmd_get(args: argparse.Namespace) -> int:
    """Execute get command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger = setup_logger(verbose=args.verbose)

    try:
        config = load_config(args)
        key = RecoveryPointKey(backup_vault_name=args.vault, recovery_point_arn=args.arn)
        query = TableQuery(regions=config.regions, key=key)
        logger.info(f"Looking up {args.arn} in vault {args.vault}")

        # Rows printed by earlier attempts stay printed; each key is printed once
        printed: set[RecoveryPointKey] = set()

        def print_once(row: RecoveryPointRow) -> None:
            if row.key in printed:
                return
            printed.add(row.key)
            print_row(row, args.output)

        @with_retry(max_attempts=max(args.retries, 1))
        def lookup() -> QueryResult:
            result = _run_query(args, query, config, on_row=print_once)
            failed_regions = {failure.region for failure in result.failures}
            if failed_regions and None not in failed_regions:
                # The next attempt only revisits the regions that failed
                query.region_filter = failed_regions
            result.raise_for_failures()
            return result

        lookup()
        if not printed:
            logger.info("Recovery point not found")
        return 0

    except QueryError as e:
        logger.error(f"Error getting recovery point: {e}")
        return 1
    except (ValueError, HydrateError) as e:
        logger.error(f"Error getting recovery point: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


def main() -> NoReturn:
    """Main entry point for the CLI.

    Parses arguments and dispatches to appropriate command handler.
    """
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Dispatch to command handlers
    commands = {
        "list": cmd_list,
        "get": cmd_get,
    }

    exit_code = commands[args.command](args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
