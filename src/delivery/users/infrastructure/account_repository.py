"""
Account Repository Implementation

Also compiles `AccountPredicate` / `SortSpec` values into SQLAlchemy
WHERE / ORDER BY clauses.
"""
from __future__ import annotations

from typing import Any, Callable, Optional
from uuid import UUID

from sqlalchemy import ColumnElement
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.shared.domain.pagination import Page, SortDirection
from delivery.shared.infrastructure.database.base_model import as_utc
from delivery.shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from delivery.users.domain.account import ACTIVE, Account, Deleted
from delivery.users.domain.exceptions import DuplicateUsernameError
from delivery.users.domain.search import (
    AccountPredicate,
    AccountQuery,
    EmailContains,
    NotDeleted,
    RoleEquals,
    SortField,
    SortSpec,
    UsernameContains,
)
from delivery.users.infrastructure.models import AccountModel

_CONDITION_COMPILERS: dict[type, Callable[[Any], ColumnElement[bool]]] = {
    NotDeleted: lambda c: AccountModel.deleted_at.is_(None),
    UsernameContains: lambda c: AccountModel.username.icontains(c.value, autoescape=True),
    EmailContains: lambda c: AccountModel.email.icontains(c.value, autoescape=True),
    RoleEquals: lambda c: AccountModel.role == c.role,
}

_SORT_COLUMNS = {
    SortField.CREATED_AT: AccountModel.created_at,
    SortField.UPDATED_AT: AccountModel.updated_at,
    SortField.DELETED_AT: AccountModel.deleted_at,
}


def compile_predicate(predicate: AccountPredicate) -> list[ColumnElement[bool]]:
    """One WHERE criterion per condition; SQLAlchemy AND-s them together."""
    criteria = []
    for condition in predicate.conditions:
        compiler = _CONDITION_COMPILERS.get(type(condition))
        if compiler is None:
            raise TypeError(f"No SQL compiler for condition {condition!r}")
        criteria.append(compiler(condition))
    return criteria


def compile_sort(sort: SortSpec) -> list[Any]:
    column = _SORT_COLUMNS[sort.field]
    if sort.direction is SortDirection.DESC:
        return [column.desc(), AccountModel.id.desc()]
    return [column.asc(), AccountModel.id.asc()]


class SQLAlchemyAccountRepository(SQLAlchemyRepository[Account, AccountModel]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=AccountModel, entity_class=Account)

    def _to_entity(self, model: AccountModel) -> Account:
        status = (
            Deleted(at=as_utc(model.deleted_at), by=model.deleted_by or "")
            if model.deleted_at is not None
            else ACTIVE
        )
        return Account(
            id=model.id,
            username=model.username,
            email=model.email,
            nickname=model.nickname,
            password_hash=model.password_hash,
            role=model.role,
            status=status,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: Account) -> AccountModel:
        return AccountModel(
            id=entity.id,
            username=entity.username,
            email=entity.email,
            nickname=entity.nickname,
            password_hash=entity.password_hash,
            role=entity.role,
            deleted_at=entity.deleted_at,
            deleted_by=entity.deleted_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def find_active_by_username(self, username: str) -> Optional[Account]:
        return await self.find_one_where(
            AccountModel.username == username,
            AccountModel.deleted_at.is_(None),
        )

    async def find_active_by_id(self, account_id: UUID) -> Optional[Account]:
        return await self.find_one_where(
            AccountModel.id == account_id,
            AccountModel.deleted_at.is_(None),
        )

    async def exists_by_username(self, username: str) -> bool:
        return await self.exists_where(AccountModel.username == username)

    async def add(self, account: Account) -> Account:
        try:
            return await super().add(account)
        except IntegrityError as e:
            if "username" in str(e.orig).lower():
                raise DuplicateUsernameError(account.username) from e
            raise

    async def save(self, account: Account) -> Account:
        return await self.update(account)

    async def search(self, query: AccountQuery) -> Page[Account]:
        return await self.paginate(
            criteria=compile_predicate(query.predicate),
            order_by=compile_sort(query.sort),
            page_request=query.page,
        )
