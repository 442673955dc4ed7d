"""
Delivery address entity.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol
from uuid import UUID

from delivery.shared.domain.base_entity import BaseEntity

MAX_ADDRESSES_PER_ACCOUNT = 3


class DeliveryAddress(BaseEntity):
    """
    Attributes:
        account_id: Owning account
        delivery_address: Street-level address; unique per account
        delivery_address_info: Label or delivery notes
        detail_address: Unit/floor details, "" when not given
    """

    def __init__(
        self,
        account_id: UUID,
        delivery_address: str,
        delivery_address_info: str,
        detail_address: str = "",
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        super().__init__(id, created_at, updated_at)
        self.account_id = account_id
        self.delivery_address = delivery_address
        self.delivery_address_info = delivery_address_info
        self.detail_address = detail_address


class DeliveryAddressRepository(Protocol):
    async def add(self, address: DeliveryAddress) -> DeliveryAddress:
        """Insert; raises DuplicateAddressError when the account already has the address."""
        ...

    async def exists_for_account(self, account_id: UUID, delivery_address: str) -> bool:
        ...

    async def count_for_account(self, account_id: UUID) -> int:
        ...

    async def list_for_account(self, account_id: UUID) -> list[DeliveryAddress]:
        ...
