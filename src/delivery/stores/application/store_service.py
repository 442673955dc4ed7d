"""
Store Service
"""
from __future__ import annotations

from typing import Callable
from uuid import UUID

from delivery.shared.exceptions import NotFoundError
from delivery.shared.logging import get_logger
from delivery.stores.application.dto import CreateStoreRequest, StoreView
from delivery.stores.domain.repositories import StoresUnitOfWork
from delivery.stores.domain.store import Store
from delivery.users.domain import access_policy
from delivery.users.domain.access_policy import AccessOperation, Actor

logger = get_logger(__name__)


def store_not_found(store_id: UUID) -> NotFoundError:
    return NotFoundError(f"Store Not Found By Id : {store_id}")


class StoreService:
    def __init__(self, uow_factory: Callable[[], StoresUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create_store(self, actor: Actor, request: CreateStoreRequest) -> StoreView:
        access_policy.require(actor, None, AccessOperation.MANAGE_CATALOG)

        async with self._uow_factory() as uow:
            store = await uow.stores.add(
                Store(
                    name=request.name,
                    address=request.address,
                    category=request.category,
                    is_open=request.is_open,
                )
            )
            await uow.commit()

        logger.info("Store created", store_id=str(store.id), actor=actor.username)
        return StoreView.from_entity(store)

    async def get_store(self, store_id: UUID) -> StoreView:
        async with self._uow_factory() as uow:
            store = await uow.stores.find_active_by_id(store_id)
        if store is None:
            raise store_not_found(store_id)
        return StoreView.from_entity(store)
