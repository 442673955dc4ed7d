"""
Region Service
Operating regions of stores.
"""
from __future__ import annotations

from typing import Callable, Optional
from uuid import UUID

from delivery.shared.domain.pagination import Page, PageRequest
from delivery.shared.exceptions import NotFoundError
from delivery.shared.logging import get_logger
from delivery.stores.application.dto import RegionRequest, RegionView
from delivery.stores.application.store_service import store_not_found
from delivery.stores.domain.region import Region
from delivery.stores.domain.repositories import StoresUnitOfWork
from delivery.users.domain import access_policy
from delivery.users.domain.access_policy import AccessOperation, Actor

logger = get_logger(__name__)


def _views(page: Page[Region]) -> Page[RegionView]:
    return Page(
        items=[RegionView.from_entity(r) for r in page.items],
        total=page.total,
        page=page.page,
        size=page.size,
    )


class RegionService:
    def __init__(self, uow_factory: Callable[[], StoresUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    @staticmethod
    async def _load_region(uow: StoresUnitOfWork, region_id: UUID) -> Region:
        region = await uow.regions.find_active_by_id(region_id)
        if region is None:
            raise NotFoundError(f"Region Not Found By Id : {region_id}")
        return region

    async def create_region(self, actor: Actor, request: RegionRequest) -> RegionView:
        access_policy.require(actor, None, AccessOperation.MANAGE_CATALOG)

        async with self._uow_factory() as uow:
            if await uow.stores.find_active_by_id(request.store_id) is None:
                raise store_not_found(request.store_id)
            region = await uow.regions.add(
                Region(store_id=request.store_id, name=request.name, created_by=actor.username)
            )
            await uow.commit()

        logger.info("Region created", region_id=str(region.id), store_id=str(request.store_id))
        return RegionView.from_entity(region)

    async def list_regions(self, page_request: PageRequest, store_id: Optional[UUID] = None) -> Page[RegionView]:
        """All non-deleted regions, or only those of `store_id`, oldest first."""
        async with self._uow_factory() as uow:
            if store_id is not None and await uow.stores.find_active_by_id(store_id) is None:
                raise store_not_found(store_id)
            page = await uow.regions.list_active(page_request, store_id=store_id)
        return _views(page)

    async def search_regions(self, keyword: str, page_request: PageRequest) -> Page[RegionView]:
        async with self._uow_factory() as uow:
            page = await uow.regions.search_active(keyword, page_request)
        return _views(page)

    async def update_region(self, region_id: UUID, request: RegionRequest, actor: Actor) -> RegionView:
        access_policy.require(actor, None, AccessOperation.MANAGE_CATALOG)

        async with self._uow_factory() as uow:
            region = await self._load_region(uow, region_id)
            if request.store_id != region.store_id and await uow.stores.find_active_by_id(request.store_id) is None:
                raise store_not_found(request.store_id)
            region.store_id = request.store_id
            region.rename(request.name, by=actor.username)
            region = await uow.regions.save(region)
            await uow.commit()

        logger.info("Region updated", region_id=str(region_id), actor=actor.username)
        return RegionView.from_entity(region)

    async def delete_region(self, region_id: UUID, actor: Actor) -> None:
        access_policy.require(actor, None, AccessOperation.MANAGE_CATALOG)

        async with self._uow_factory() as uow:
            region = await self._load_region(uow, region_id)
            region.soft_delete(by=actor.username)
            await uow.regions.save(region)
            await uow.commit()

        logger.info("Region deleted", region_id=str(region_id), actor=actor.username)
