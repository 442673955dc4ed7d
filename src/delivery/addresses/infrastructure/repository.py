"""
DeliveryAddress Repository Implementation
"""
from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.addresses.domain.address import DeliveryAddress
from delivery.addresses.domain.exceptions import DuplicateAddressError
from delivery.addresses.infrastructure.models import DeliveryAddressModel
from delivery.shared.infrastructure.database.base_model import as_utc
from delivery.shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository

_ADDRESS_UNIQUE = "uq_delivery_addresses_account_address"


class SQLAlchemyDeliveryAddressRepository(SQLAlchemyRepository[DeliveryAddress, DeliveryAddressModel]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DeliveryAddressModel, entity_class=DeliveryAddress)

    def _to_entity(self, model: DeliveryAddressModel) -> DeliveryAddress:
        return DeliveryAddress(
            id=model.id,
            account_id=model.account_id,
            delivery_address=model.delivery_address,
            delivery_address_info=model.delivery_address_info,
            detail_address=model.detail_address,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: DeliveryAddress) -> DeliveryAddressModel:
        return DeliveryAddressModel(
            id=entity.id,
            account_id=entity.account_id,
            delivery_address=entity.delivery_address,
            delivery_address_info=entity.delivery_address_info,
            detail_address=entity.detail_address,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def add(self, address: DeliveryAddress) -> DeliveryAddress:
        try:
            return await super().add(address)
        except IntegrityError as e:
            message = str(e.orig).lower()
            if _ADDRESS_UNIQUE in message or "delivery_addresses.delivery_address" in message:
                raise DuplicateAddressError(address.delivery_address) from e
            raise

    async def exists_for_account(self, account_id: UUID, delivery_address: str) -> bool:
        return await self.exists_where(
            DeliveryAddressModel.account_id == account_id,
            DeliveryAddressModel.delivery_address == delivery_address,
        )

    async def count_for_account(self, account_id: UUID) -> int:
        return await self.count_where(DeliveryAddressModel.account_id == account_id)

    async def list_for_account(self, account_id: UUID) -> list[DeliveryAddress]:
        return await self.find_all_where(
            DeliveryAddressModel.account_id == account_id,
            order_by=(DeliveryAddressModel.created_at.desc(),),
        )
