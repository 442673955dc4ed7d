"""
Ports the account service depends on.
"""
from __future__ import annotations

from typing import Optional, Protocol, Self
from uuid import UUID

from delivery.shared.domain.pagination import Page
from delivery.users.domain.account import Account
from delivery.users.domain.refresh_token import RefreshToken
from delivery.users.domain.search import AccountQuery


class AccountRepository(Protocol):
    async def find_active_by_username(self, username: str) -> Optional[Account]:
        ...

    async def find_active_by_id(self, account_id: UUID) -> Optional[Account]:
        ...

    async def exists_by_username(self, username: str) -> bool:
        """True if any account, deleted or not, holds this username."""
        ...

    async def add(self, account: Account) -> Account:
        """Insert; raises DuplicateUsernameError when the username is taken."""
        ...

    async def save(self, account: Account) -> Account:
        ...

    async def search(self, query: AccountQuery) -> Page[Account]:
        ...


class RefreshTokenRepository(Protocol):
    async def add(self, token: RefreshToken) -> RefreshToken:
        ...

    async def get_by_hash(self, token_hash: str) -> Optional[RefreshToken]:
        ...

    async def revoke(self, token: RefreshToken) -> None:
        ...

    async def revoke_all_for_account(self, account_id: UUID) -> int:
        ...


class UsersUnitOfWork(Protocol):
    accounts: AccountRepository
    refresh_tokens: RefreshTokenRepository

    async def __aenter__(self) -> Self:
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
