#!/usr/bin/env python3
"""
Error classification for the hydration pipeline.

Every upstream failure is converted into a HydrateError tagged with an ErrorKind.
Which upstream error codes are ignorable depends on the operation that raised
them, so the decision lives in an explicit per-operation table.
"""

from enum import Enum
from typing import Optional

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "errors",
        "description": "Error kinds and classification table",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


# Operation names, matching the boto3 backup client method names
LIST_BACKUP_VAULTS = "list_backup_vaults"
LIST_RECOVERY_POINTS = "list_recovery_points_by_backup_vault"
DESCRIBE_RECOVERY_POINT = "describe_recovery_point"
DERIVE_COLUMNS = "derive_columns"


class ErrorKind(Enum):
    """Classification of a pipeline failure."""

    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    TRANSIENT = "transient"
    CONTRACT_VIOLATION = "contract_violation"
    FATAL = "fatal"


# Error codes that omit the row instead of failing the query, per operation.
# AWS Backup answers a missing vault or recovery point with ResourceNotFoundException.
# Listing vaults has none: a denied vault listing is a blanket credential failure.
_NOT_FOUND_OR_DENIED = frozenset(
    {"NotFoundException", "ResourceNotFoundException", "AccessDeniedException"}
)
IGNORABLE_ERROR_CODES: dict[str, frozenset[str]] = {
    DESCRIBE_RECOVERY_POINT: _NOT_FOUND_OR_DENIED,
    LIST_RECOVERY_POINTS: _NOT_FOUND_OR_DENIED,
    LIST_BACKUP_VAULTS: frozenset(),
}

# AWS error codes that the host may retry
TRANSIENT_ERROR_CODES = frozenset(
    {
        "Throttling",
        "ThrottlingException",
        "TooManyRequestsException",
        "RequestLimitExceeded",
        "ServiceUnavailable",
        "ServiceUnavailableException",
        "InternalError",
        "InternalFailure",
        "RequestTimeout",
        "RequestTimeoutException",
    }
)

_IGNORABLE_KINDS = {
    "NotFoundException": ErrorKind.NOT_FOUND,
    "ResourceNotFoundException": ErrorKind.NOT_FOUND,
    "AccessDeniedException": ErrorKind.ACCESS_DENIED,
}


def classify_error(operation: str, error_code: str) -> ErrorKind:
    """Classify an upstream error code raised by an operation.

    Args:
        operation: Upstream operation name (e.g., "describe_recovery_point")
        error_code: AWS error code (e.g., "NotFoundException")

    Returns:
        ErrorKind for the failure
    """
    if error_code in IGNORABLE_ERROR_CODES.get(operation, frozenset()):
        return _IGNORABLE_KINDS[error_code]
    if error_code in TRANSIENT_ERROR_CODES:
        return ErrorKind.TRANSIENT
    return ErrorKind.FATAL


class HydrateError(Exception):
    """A classified failure carrying the scope, parent and key it happened in."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        operation: str,
        region: Optional[str] = None,
        vault_name: Optional[str] = None,
        recovery_point_arn: Optional[str] = None,
        cursor: Optional[str] = None,
        error_code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.operation = operation
        self.region = region
        self.vault_name = vault_name
        self.recovery_point_arn = recovery_point_arn
        self.cursor = cursor
        self.error_code = error_code

    @property
    def ignorable(self) -> bool:
        """True if the failure should silently omit the row."""
        return self.kind in (ErrorKind.NOT_FOUND, ErrorKind.ACCESS_DENIED)

    @property
    def retryable(self) -> bool:
        """True if the host's retry policy may retry the failed request."""
        return self.kind == ErrorKind.TRANSIENT

    def with_context(self, **context: Optional[str]) -> "HydrateError":
        """Fill in context fields that are not set yet.

        Args:
            **context: Any of region, vault_name, recovery_point_arn, cursor

        Returns:
            This error, for chaining in a raise statement
        """
        for name, value in context.items():
            if getattr(self, name) is None:
                setattr(self, name, value)
        return self

    def location(self) -> str:
        """Describe where the failure happened.

        Returns:
            String such as "region=us-east-1 vault=main cursor=abc"
        """
        parts = []
        if self.region:
            parts.append(f"region={self.region}")
        if self.vault_name:
            parts.append(f"vault={self.vault_name}")
        if self.recovery_point_arn:
            parts.append(f"recovery_point={self.recovery_point_arn}")
        if self.cursor:
            parts.append(f"cursor={self.cursor}")
        return " ".join(parts) or "unscoped"

    def to_dict(self) -> dict[str, Optional[str]]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation
        """
        return {
            "kind": self.kind.value,
            "operation": self.operation,
            "error_code": self.error_code,
            "message": self.message,
            "region": self.region,
            "vault_name": self.vault_name,
            "recovery_point_arn": self.recovery_point_arn,
            "cursor": self.cursor,
        }

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.operation} ({self.location()}): {self.message}"


class MalformedArnError(HydrateError):
    """Raised when a recovery point ARN has no path segment to derive a title from."""

    def __init__(self, arn: str) -> None:
        super().__init__(
            f"Malformed recovery point ARN, expected at least 2 '/'-delimited segments: {arn!r}",
            kind=ErrorKind.CONTRACT_VIOLATION,
            operation=DERIVE_COLUMNS,
            recovery_point_arn=arn,
        )


class MissingKeyError(HydrateError):
    """Raised when a point lookup is missing one of its mandatory key fields."""

    def __init__(self, field_name: str) -> None:
        super().__init__(
            f"Point lookup requires a non-empty {field_name}",
            kind=ErrorKind.CONTRACT_VIOLATION,
            operation=DESCRIBE_RECOVERY_POINT,
        )
        self.field_name = field_name


class QueryError(Exception):
    """Raised by the host when a query recorded one or more fatal failures."""

    def __init__(self, failures: list[HydrateError]) -> None:
        self.failures = failures
        summary = "; ".join(str(failure) for failure in failures)
        super().__init__(f"{len(failures)} failure(s) during query: {summary}")

    @property
    def retryable(self) -> bool:
        """True if every failure is transient."""
        return bool(self.failures) and all(f.retryable for f in self.failures)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
