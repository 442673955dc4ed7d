from datetime import datetime, timedelta, timezone

import pytest

from delivery.shared.domain.pagination import SortDirection
from delivery.shared.exceptions import InvalidArgumentError
from delivery.users.domain.account import Account, Deleted
from delivery.users.domain.role import Role
from delivery.users.domain.search import (
    AccountSearchRequest,
    EmailContains,
    NotDeleted,
    RoleEquals,
    SortField,
    SortSpec,
    UsernameContains,
    build_account_query,
)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _account(username, email=None, role=Role.CUSTOMER, created=0, deleted=False):
    account = Account(
        username=username,
        email=email or f"{username}@mail.com",
        nickname=username,
        password_hash="x",
        role=role,
        created_at=T0 + timedelta(minutes=created),
    )
    if deleted:
        account.status = Deleted(at=T0 + timedelta(days=1), by="admin")
    return account


def test_empty_request_only_excludes_deleted():
    query = build_account_query(AccountSearchRequest())
    assert query.predicate.conditions == (NotDeleted(),)
    assert query.sort == SortSpec(SortField.CREATED_AT, SortDirection.ASC)
    assert query.page.page == 0 and query.page.size == 10


def test_all_filters_are_anded_in_order():
    query = build_account_query(AccountSearchRequest(username="kim", email="mail", role=Role.MANAGER))
    assert query.predicate.conditions == (
        NotDeleted(),
        UsernameContains("kim"),
        EmailContains("mail"),
        RoleEquals(Role.MANAGER),
    )


def test_empty_filters_are_ignored():
    query = build_account_query(AccountSearchRequest(username="", email=""))
    assert query.predicate.conditions == (NotDeleted(),)


def test_whitespace_filters_are_applied_verbatim():
    query = build_account_query(AccountSearchRequest(username=" ", email="kim "))
    assert query.predicate.conditions == (NotDeleted(), UsernameContains(" "), EmailContains("kim "))
    assert not query.predicate.matches(_account("kim"))


def test_email_filter_can_match_username_for_older_clients():
    query = build_account_query(AccountSearchRequest(email="kim"), email_matches_username=True)
    assert query.predicate.conditions == (NotDeleted(), UsernameContains("kim"))


@pytest.mark.parametrize("sort_by", ["createdAt", "updatedAt", "deletedAt"])
def test_allowed_sort_fields(sort_by):
    assert build_account_query(AccountSearchRequest(sort_by=sort_by)).sort.field == SortField(sort_by)


@pytest.mark.parametrize("sort_by", ["username", "created_at", "", "password"])
def test_unknown_sort_field_is_rejected(sort_by):
    with pytest.raises(InvalidArgumentError) as exc:
        build_account_query(AccountSearchRequest(sort_by=sort_by))
    assert exc.value.message.startswith("SortBy must be one of the allowed values")


@pytest.mark.parametrize(
    "order, expected",
    [("desc", SortDirection.DESC), ("asc", SortDirection.ASC), ("DESC", SortDirection.ASC), (None, SortDirection.ASC), ("x", SortDirection.ASC)],
)
def test_only_literal_desc_sorts_descending(order, expected):
    assert build_account_query(AccountSearchRequest(order=order)).sort.direction is expected


def test_negative_page_is_invalid_argument():
    with pytest.raises(InvalidArgumentError):
        build_account_query(AccountSearchRequest(page=-1))


def test_predicate_matches_case_insensitively():
    query = build_account_query(AccountSearchRequest(username="KIM", email="Mail.COM"))
    assert query.predicate.matches(_account("kimchi"))
    assert not query.predicate.matches(_account("lee"))
    assert not query.predicate.matches(_account("kimchi", deleted=True))


def test_role_filter():
    query = build_account_query(AccountSearchRequest(role=Role.MASTER))
    assert query.predicate.matches(_account("a", role=Role.MASTER))
    assert not query.predicate.matches(_account("b", role=Role.MANAGER))


def test_in_memory_sort_puts_missing_values_last():
    a, b, c = _account("a", created=2), _account("b", created=1, deleted=True), _account("c", created=3)
    spec = SortSpec(SortField.DELETED_AT, SortDirection.DESC)
    assert spec.sort([a, b, c])[0] is b

    spec = SortSpec(SortField.CREATED_AT, SortDirection.DESC)
    assert [x.username for x in spec.sort([a, b, c])] == ["c", "a", "b"]
