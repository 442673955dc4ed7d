"""
Account search: turns a sparse search request into a composable filter
predicate plus a validated sort order.

The predicate is plain data. It can be evaluated in memory with
`AccountPredicate.matches` or compiled to SQL by the persistence adapter
(`delivery.users.infrastructure.account_repository`). Nothing here knows
about the query engine.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Iterable, Optional, Union

from delivery.shared.domain.pagination import PageRequest, SortDirection
from delivery.shared.exceptions import InvalidArgumentError
from delivery.users.domain.account import Account
from delivery.users.domain.role import Role


class SortField(StrEnum):
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    DELETED_AT = "deletedAt"


SORT_FIELD_ERROR = "SortBy must be one of the allowed values: " + ", ".join(f.value for f in SortField)


@dataclass(frozen=True)
class AccountSearchRequest:
    username: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None
    page: int = 0
    size: int = 10
    sort_by: str = SortField.CREATED_AT.value
    order: Optional[str] = None


# ---------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class NotDeleted:
    def matches(self, account: Account) -> bool:
        return account.is_active


@dataclass(frozen=True)
class UsernameContains:
    value: str

    def matches(self, account: Account) -> bool:
        return self.value.lower() in account.username.lower()


@dataclass(frozen=True)
class EmailContains:
    value: str

    def matches(self, account: Account) -> bool:
        return self.value.lower() in account.email.lower()


@dataclass(frozen=True)
class RoleEquals:
    role: Role

    def matches(self, account: Account) -> bool:
        return account.role == self.role


Condition = Union[NotDeleted, UsernameContains, EmailContains, RoleEquals]


@dataclass(frozen=True)
class AccountPredicate:
    """Conjunction of conditions; an empty predicate matches everything."""

    conditions: tuple[Condition, ...] = ()

    def and_(self, condition: Condition) -> AccountPredicate:
        return AccountPredicate(self.conditions + (condition,))

    def matches(self, account: Account) -> bool:
        return all(c.matches(account) for c in self.conditions)


@dataclass(frozen=True)
class SortSpec:
    field: SortField = SortField.CREATED_AT
    direction: SortDirection = SortDirection.ASC

    def value_of(self, account: Account) -> datetime | None:
        return {
            SortField.CREATED_AT: account.created_at,
            SortField.UPDATED_AT: account.updated_at,
            SortField.DELETED_AT: account.deleted_at,
        }[self.field]

    def sort(self, accounts: Iterable[Account]) -> list[Account]:
        """In-memory ordering; accounts without a value for the field go last."""
        accounts = list(accounts)
        present = [a for a in accounts if self.value_of(a) is not None]
        missing = [a for a in accounts if self.value_of(a) is None]
        present.sort(key=self.value_of, reverse=self.direction is SortDirection.DESC)
        return present + missing


@dataclass(frozen=True)
class AccountQuery:
    predicate: AccountPredicate
    sort: SortSpec
    page: PageRequest


# ---------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------

def parse_sort_field(value: Optional[str]) -> SortField:
    try:
        return SortField(value)
    except ValueError:
        raise InvalidArgumentError(SORT_FIELD_ERROR, details={"sort_by": value})


def _has_text(value: Optional[str]) -> bool:
    return value is not None and value != ""


def build_account_query(
    request: AccountSearchRequest,
    *,
    email_matches_username: bool = False,
) -> AccountQuery:
    """
    Build the filter predicate and sort order for an account search.

    Conditions are AND-ed:
      - always: the account is not deleted
      - username given: username contains it (case-insensitive)
      - email given: email contains it (case-insensitive); with
        `email_matches_username` the value is matched against the username
        instead, which is how older clients expect this filter to behave
      - role given: role equals it

    Raises InvalidArgumentError for a sort field outside
    {createdAt, updatedAt, deletedAt}. Sort direction is descending only for
    the literal "desc".
    """
    sort = SortSpec(
        field=parse_sort_field(request.sort_by),
        direction=SortDirection.parse(request.order),
    )

    predicate = AccountPredicate().and_(NotDeleted())
    if _has_text(request.username):
        predicate = predicate.and_(UsernameContains(request.username))
    if _has_text(request.email):
        value = request.email
        predicate = predicate.and_(UsernameContains(value) if email_matches_username else EmailContains(value))
    if request.role is not None:
        predicate = predicate.and_(RoleEquals(request.role))

    try:
        page = PageRequest(page=request.page, size=request.size)
    except ValueError as e:
        raise InvalidArgumentError(str(e), details={"page": request.page, "size": request.size})

    return AccountQuery(predicate=predicate, sort=sort, page=page)
