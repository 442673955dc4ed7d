"""In-memory stand-ins for the repository and unit-of-work ports."""
from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from delivery.addresses.domain.exceptions import DuplicateAddressError
from delivery.shared.domain.pagination import Page, PageRequest, SortDirection
from delivery.stores.domain.exceptions import DuplicateProductError
from delivery.users.domain.account import Account
from delivery.users.domain.exceptions import DuplicateUsernameError
from delivery.users.domain.refresh_token import RefreshToken
from delivery.users.domain.search import AccountQuery


def _page(items: list, page_request: PageRequest) -> Page:
    start = page_request.offset
    return Page(
        items=items[start:start + page_request.size],
        total=len(items),
        page=page_request.page,
        size=page_request.size,
    )


class FakeHasher:
    dummy_hash = "hashed:<dummy>"

    def __init__(self) -> None:
        self.verified: list = []

    def hash(self, plain_password: str) -> str:
        return "hashed:" + plain_password

    def verify(self, plain_password: str, hashed: str) -> bool:
        self.verified.append(hashed)
        return hashed == "hashed:" + plain_password


class InMemoryAccountRepository:
    def __init__(self, accounts: Iterable[Account] = ()) -> None:
        self.rows: Dict[UUID, Account] = {a.id: a for a in accounts}

    async def find_active_by_username(self, username: str) -> Optional[Account]:
        return next((a for a in self.rows.values() if a.username == username and a.is_active), None)

    async def find_active_by_id(self, account_id: UUID) -> Optional[Account]:
        account = self.rows.get(account_id)
        return account if account is not None and account.is_active else None

    async def exists_by_username(self, username: str) -> bool:
        return any(a.username == username for a in self.rows.values())

    async def add(self, account: Account) -> Account:
        if await self.exists_by_username(account.username):
            raise DuplicateUsernameError(account.username)
        self.rows[account.id] = account
        return account

    async def save(self, account: Account) -> Account:
        self.rows[account.id] = account
        return account

    async def search(self, query: AccountQuery) -> Page[Account]:
        matching = [a for a in self.rows.values() if query.predicate.matches(a)]
        return _page(query.sort.sort(matching), query.page)


class InMemoryRefreshTokenRepository:
    def __init__(self) -> None:
        self.rows: Dict[UUID, RefreshToken] = {}

    async def add(self, token: RefreshToken) -> RefreshToken:
        self.rows[token.id] = token
        return token

    async def get_by_hash(self, token_hash: str) -> Optional[RefreshToken]:
        return next((t for t in self.rows.values() if t.token_hash == token_hash), None)

    async def revoke(self, token: RefreshToken) -> None:
        self.rows[token.id] = token

    async def revoke_all_for_account(self, account_id: UUID) -> int:
        count = 0
        for token in self.rows.values():
            if token.account_id == account_id and not token.is_revoked:
                token.revoke()
                count += 1
        return count


class InMemoryAddressRepository:
    def __init__(self) -> None:
        self.rows: list = []

    async def add(self, address):
        if any(a.account_id == address.account_id and a.delivery_address == address.delivery_address for a in self.rows):
            raise DuplicateAddressError(address.delivery_address)
        self.rows.append(address)
        return address

    async def exists_for_account(self, account_id: UUID, delivery_address: str) -> bool:
        return any(a.account_id == account_id and a.delivery_address == delivery_address for a in self.rows)

    async def count_for_account(self, account_id: UUID) -> int:
        return sum(1 for a in self.rows if a.account_id == account_id)

    async def list_for_account(self, account_id: UUID) -> list:
        return [a for a in self.rows if a.account_id == account_id]


class InMemoryStoreRepository:
    def __init__(self) -> None:
        self.rows: Dict[UUID, Any] = {}

    async def add(self, store):
        self.rows[store.id] = store
        return store

    async def find_active_by_id(self, store_id: UUID):
        store = self.rows.get(store_id)
        return store if store is not None and not store.is_deleted else None


class InMemoryProductRepository:
    _SORT_ATTRS = {"createdAt": "created_at", "updatedAt": "updated_at", "price": "price"}

    def __init__(self) -> None:
        self.rows: Dict[UUID, Any] = {}

    async def add(self, product):
        if any(
            p.store_id == product.store_id and p.name == product.name and not p.is_deleted
            for p in self.rows.values()
        ):
            raise DuplicateProductError(product.name)
        self.rows[product.id] = product
        return product

    async def exists_active_by_name_in_store(self, name: str, store_id: UUID) -> bool:
        return any(
            p.store_id == store_id and p.name == name and not p.is_deleted
            for p in self.rows.values()
        )

    async def list_active(self, page_request: PageRequest, sort_by, direction: SortDirection) -> Page:
        attr = self._SORT_ATTRS[sort_by.value]
        items = sorted(
            (p for p in self.rows.values() if not p.is_deleted),
            key=lambda p: getattr(p, attr),
            reverse=direction is SortDirection.DESC,
        )
        return _page(items, page_request)


class InMemoryRegionRepository:
    def __init__(self) -> None:
        self.rows: Dict[UUID, Any] = {}

    def _active(self) -> list:
        return sorted(
            (r for r in self.rows.values() if not r.is_deleted),
            key=lambda r: (r.created_at, r.updated_at),
        )

    async def add(self, region):
        self.rows[region.id] = region
        return region

    async def save(self, region):
        self.rows[region.id] = region
        return region

    async def find_active_by_id(self, region_id: UUID):
        region = self.rows.get(region_id)
        return region if region is not None and not region.is_deleted else None

    async def list_active(self, page_request: PageRequest, store_id: Optional[UUID] = None) -> Page:
        items = [r for r in self._active() if store_id is None or r.store_id == store_id]
        return _page(items, page_request)

    async def search_active(self, keyword: str, page_request: PageRequest) -> Page:
        items = [r for r in self._active() if keyword.lower() in r.name.lower()]
        return _page(items, page_request)


class FakeUnitOfWork:
    """Hands out the same repositories every time; counts commits."""

    def __init__(self, **repositories: Any) -> None:
        for name, repository in repositories.items():
            setattr(self, name, repository)
        self.commits = 0

    async def __aenter__(self) -> FakeUnitOfWork:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        return None


class Clock:
    """Settable clock for time-dependent service behaviour."""

    def __init__(self, now) -> None:
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)
