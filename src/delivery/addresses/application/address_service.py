"""
Delivery Address Service
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Protocol, Self
from uuid import UUID

from delivery.addresses.domain.address import (
    MAX_ADDRESSES_PER_ACCOUNT,
    DeliveryAddress,
    DeliveryAddressRepository,
)
from delivery.addresses.domain.exceptions import DuplicateAddressError
from delivery.shared.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from delivery.shared.logging import get_logger
from delivery.users.domain.access_policy import Actor
from delivery.users.domain.account import Account
from delivery.users.domain.repositories import AccountRepository

logger = get_logger(__name__)


def _duplicate_address(delivery_address: str) -> ConflictError:
    return ConflictError(f"Delivery address already exists for this user : {delivery_address}")


class AddressesUnitOfWork(Protocol):
    accounts: AccountRepository
    addresses: DeliveryAddressRepository

    async def __aenter__(self) -> Self:
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    async def commit(self) -> None:
        ...


@dataclass(frozen=True)
class AddAddressRequest:
    delivery_address: str
    delivery_address_info: str
    detail_address: Optional[str] = None


@dataclass(frozen=True)
class AddressView:
    id: UUID
    account_id: UUID
    delivery_address: str
    delivery_address_info: str
    detail_address: str
    created_at: datetime

    @classmethod
    def from_entity(cls, address: DeliveryAddress) -> AddressView:
        return cls(
            id=address.id,
            account_id=address.account_id,
            delivery_address=address.delivery_address,
            delivery_address_info=address.delivery_address_info,
            detail_address=address.detail_address,
            created_at=address.created_at,
        )


class AddressService:
    def __init__(self, uow_factory: Callable[[], AddressesUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    @staticmethod
    async def _load_actor_account(uow: AddressesUnitOfWork, actor: Actor) -> Account:
        account = await uow.accounts.find_active_by_username(actor.username)
        if account is None:
            raise NotFoundError(f"Invalid username : {actor.username}")
        return account

    async def add_address(self, actor: Actor, request: AddAddressRequest) -> AddressView:
        """
        Register a delivery address for the calling account.

        Raises:
            NotFoundError: the caller's account no longer exists
            ConflictError: the account already has this delivery address
            InvalidArgumentError: the account already holds the maximum number of addresses
        """
        async with self._uow_factory() as uow:
            account = await self._load_actor_account(uow, actor)

            if await uow.addresses.exists_for_account(account.id, request.delivery_address):
                raise _duplicate_address(request.delivery_address)
            if await uow.addresses.count_for_account(account.id) >= MAX_ADDRESSES_PER_ACCOUNT:
                raise InvalidArgumentError(
                    f"You can register at most {MAX_ADDRESSES_PER_ACCOUNT} delivery addresses."
                )

            try:
                address = await uow.addresses.add(
                    DeliveryAddress(
                        account_id=account.id,
                        delivery_address=request.delivery_address,
                        delivery_address_info=request.delivery_address_info,
                        detail_address=request.detail_address if request.detail_address is not None else "",
                    )
                )
            except DuplicateAddressError:
                # a concurrent insert won; the unique constraint decided
                raise _duplicate_address(request.delivery_address)
            await uow.commit()

        logger.info("Delivery address added", account_id=str(account.id), address_id=str(address.id))
        return AddressView.from_entity(address)

    async def list_addresses(self, actor: Actor) -> list[AddressView]:
        async with self._uow_factory() as uow:
            account = await self._load_actor_account(uow, actor)
            addresses = await uow.addresses.list_for_account(account.id)
        return [AddressView.from_entity(a) for a in addresses]
