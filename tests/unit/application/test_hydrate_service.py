"""Unit tests for HydrateService."""

from unittest.mock import Mock

import pytest

from conftest import make_page, make_recovery_point, make_vault
from recovery_point_table.application.hydrate_service import HydrateService
from recovery_point_table.domain.errors import (
    DESCRIBE_RECOVERY_POINT,
    LIST_RECOVERY_POINTS,
    ErrorKind,
    HydrateError,
    MissingKeyError,
)
from recovery_point_table.domain.page import PaginationState
from recovery_point_table.domain.recovery_point import ItemShape, RecoveryPointKey
from recovery_point_table.domain.scope import ScopeContext


def _never() -> bool:
    return False


def test_list_parents_filters_by_name(scope: ScopeContext) -> None:
    """Test that vaults outside the requested names are skipped."""
    mock_repo = Mock()
    mock_repo.list_vaults.return_value = iter([make_vault("a"), make_vault("b"), make_vault("c")])
    service = HydrateService(mock_repo)

    vaults = list(service.list_parents(scope, {"a", "c"}))

    assert [v.name for v in vaults] == ["a", "c"]


def test_list_parents_empty(scope: ScopeContext) -> None:
    """Test that zero vaults is not an error."""
    mock_repo = Mock()
    mock_repo.list_vaults.return_value = iter([])

    assert list(HydrateService(mock_repo).list_parents(scope)) == []


def test_list_parents_stops_before_next_vault_page(scope: ScopeContext) -> None:
    """Test that cancellation prevents the next vault page request."""
    requested_pages = []

    def list_vaults(_scope):
        for page_number, names in enumerate([["a", "b"], ["c"]], start=1):
            requested_pages.append(page_number)
            for name in names:
                yield make_vault(name)

    mock_repo = Mock()
    mock_repo.list_vaults.side_effect = list_vaults
    cancelled = []

    vaults = []
    for vault in HydrateService(mock_repo).list_parents(scope, cancel_check=lambda: bool(cancelled)):
        vaults.append(vault)
        if vault.name == "b":
            cancelled.append(True)

    assert [v.name for v in vaults] == ["a", "b"]
    assert requested_pages == [1]


def test_pagination_emits_all_pages_in_order(scope: ScopeContext) -> None:
    """Test that N pages yield their concatenated items using exactly N calls."""
    vault = make_vault("main")
    pages = [
        make_page([make_recovery_point("main", "1"), make_recovery_point("main", "2")], "t1"),
        make_page([], "t2"),  # empty but not final
        make_page([make_recovery_point("main", "3")], "t3"),
        make_page([make_recovery_point("main", "4")]),
    ]
    mock_repo = Mock()
    mock_repo.list_recovery_points_page.side_effect = pages
    emitted = []

    state = HydrateService(mock_repo).list_recovery_points(scope, vault, emitted.append, _never)

    assert state is PaginationState.EXHAUSTED
    assert [rp.recovery_point_arn.rsplit("/", 1)[1] for rp in emitted] == ["1", "2", "3", "4"]
    assert mock_repo.list_recovery_points_page.call_count == 4
    cursors = [call.args[2] for call in mock_repo.list_recovery_points_page.call_args_list]
    assert cursors == [None, "t1", "t2", "t3"]


def test_items_emitted_before_next_page_requested(scope: ScopeContext) -> None:
    """Test that a page's items are emitted before the following request."""
    vault = make_vault("main")
    events = []

    def fetch(_scope, _vault_name, cursor):
        events.append(f"fetch:{cursor}")
        if cursor is None:
            return make_page([make_recovery_point("main", "1")], "t1")
        return make_page([make_recovery_point("main", "2")])

    mock_repo = Mock()
    mock_repo.list_recovery_points_page.side_effect = fetch

    HydrateService(mock_repo).list_recovery_points(
        scope, vault, lambda rp: events.append(f"emit:{rp.recovery_point_arn[-1]}"), _never
    )

    assert events == ["fetch:None", "emit:1", "fetch:t1", "emit:2"]


def test_cancellation_before_page_k(scope: ScopeContext) -> None:
    """Test that cancelling before page 3 yields exactly pages 1 and 2."""
    vault = make_vault("main")
    mock_repo = Mock()
    mock_repo.list_recovery_points_page.side_effect = [
        make_page([make_recovery_point("main", "1")], "t1"),
        make_page([make_recovery_point("main", "2")], "t2"),
        make_page([make_recovery_point("main", "3")], "t3"),
        make_page([make_recovery_point("main", "4")]),
    ]
    checks = iter([False, False, True])
    emitted = []

    state = HydrateService(mock_repo).list_recovery_points(
        scope, vault, emitted.append, lambda: next(checks)
    )

    assert state is PaginationState.HAS_MORE
    assert len(emitted) == 2
    assert mock_repo.list_recovery_points_page.call_count == 2


def test_page_error_propagates(scope: ScopeContext) -> None:
    """Test that a failing page aborts the listing after earlier items were emitted."""
    vault = make_vault("main")
    mock_repo = Mock()
    mock_repo.list_recovery_points_page.side_effect = [
        make_page([make_recovery_point("main", "1")], "t1"),
        HydrateError("slow down", ErrorKind.TRANSIENT, LIST_RECOVERY_POINTS, cursor="t1"),
    ]
    emitted = []

    with pytest.raises(HydrateError) as exc_info:
        HydrateService(mock_repo).list_recovery_points(scope, vault, emitted.append, _never)

    assert exc_info.value.cursor == "t1"
    assert len(emitted) == 1


def test_get_recovery_point_found(scope: ScopeContext) -> None:
    """Test a successful point lookup."""
    item = make_recovery_point("main", "1", shape=ItemShape.GET)
    mock_repo = Mock()
    mock_repo.describe_recovery_point.return_value = item

    resolution = HydrateService(mock_repo).get_recovery_point(scope, item.key)

    assert resolution.found is True
    assert resolution.item is item
    mock_repo.describe_recovery_point.assert_called_once_with(scope, item.key)


@pytest.mark.parametrize("kind", [ErrorKind.NOT_FOUND, ErrorKind.ACCESS_DENIED])
def test_get_recovery_point_ignorable(scope: ScopeContext, kind: ErrorKind) -> None:
    """Test that ignorable errors omit the row instead of raising."""
    mock_repo = Mock()
    mock_repo.describe_recovery_point.side_effect = HydrateError(
        "omitted", kind, DESCRIBE_RECOVERY_POINT
    )

    resolution = HydrateService(mock_repo).get_recovery_point(
        scope, RecoveryPointKey("main", "arn:aws:backup:us-east-1:1:recovery-point:/main/1")
    )

    assert resolution.found is False
    assert resolution.error.kind is kind


def test_get_recovery_point_fatal_raises(scope: ScopeContext) -> None:
    """Test that throttling is raised as a retryable error."""
    mock_repo = Mock()
    mock_repo.describe_recovery_point.side_effect = HydrateError(
        "slow down", ErrorKind.TRANSIENT, DESCRIBE_RECOVERY_POINT
    )

    with pytest.raises(HydrateError) as exc_info:
        HydrateService(mock_repo).get_recovery_point(scope, RecoveryPointKey("main", "arn:x:/main/1"))

    assert exc_info.value.retryable is True


@pytest.mark.parametrize(
    "key,field_name",
    [
        (RecoveryPointKey("", "arn:x:/main/1"), "backup_vault_name"),
        (RecoveryPointKey("main", ""), "recovery_point_arn"),
    ],
)
def test_get_recovery_point_missing_key(
    scope: ScopeContext, key: RecoveryPointKey, field_name: str
) -> None:
    """Test that a missing key field fails before any upstream call."""
    mock_repo = Mock()

    with pytest.raises(MissingKeyError) as exc_info:
        HydrateService(mock_repo).get_recovery_point(scope, key)

    assert exc_info.value.field_name == field_name
    mock_repo.describe_recovery_point.assert_not_called()


def test_hydrate_list_item_fetches_detail(scope: ScopeContext) -> None:
    """Test that a list-shape item is resolved to its get-shape record."""
    listed = make_recovery_point("main", "1")
    detail = make_recovery_point("main", "1", shape=ItemShape.GET)
    mock_repo = Mock()
    mock_repo.describe_recovery_point.return_value = detail

    resolution = HydrateService(mock_repo).hydrate(scope, listed)

    assert resolution.item is detail
    assert resolution.item.key == listed.key
    assert listed.populated_columns() <= detail.populated_columns()


def test_hydrate_get_item_is_passthrough(scope: ScopeContext) -> None:
    """Test that a get-shape item needs no further call."""
    detail = make_recovery_point("main", "1", shape=ItemShape.GET)
    mock_repo = Mock()

    resolution = HydrateService(mock_repo).hydrate(scope, detail)

    assert resolution.item is detail
    mock_repo.describe_recovery_point.assert_not_called()
