"""
Ports for the store/product/region services.
"""
from __future__ import annotations

from typing import Optional, Protocol, Self
from uuid import UUID

from delivery.shared.domain.pagination import Page, PageRequest, SortDirection
from delivery.stores.domain.product import Product, ProductSortField
from delivery.stores.domain.region import Region
from delivery.stores.domain.store import Store


class StoreRepository(Protocol):
    async def add(self, store: Store) -> Store:
        ...

    async def find_active_by_id(self, store_id: UUID) -> Optional[Store]:
        ...


class ProductRepository(Protocol):
    async def add(self, product: Product) -> Product:
        """Insert; raises DuplicateProductError when the store already lists the name."""
        ...

    async def exists_active_by_name_in_store(self, name: str, store_id: UUID) -> bool:
        ...

    async def list_active(
        self,
        page_request: PageRequest,
        sort_by: ProductSortField,
        direction: SortDirection,
    ) -> Page[Product]:
        ...


class RegionRepository(Protocol):
    async def add(self, region: Region) -> Region:
        ...

    async def save(self, region: Region) -> Region:
        ...

    async def find_active_by_id(self, region_id: UUID) -> Optional[Region]:
        ...

    async def list_active(self, page_request: PageRequest, store_id: Optional[UUID] = None) -> Page[Region]:
        ...

    async def search_active(self, keyword: str, page_request: PageRequest) -> Page[Region]:
        ...


class StoresUnitOfWork(Protocol):
    stores: StoreRepository
    products: ProductRepository
    regions: RegionRepository

    async def __aenter__(self) -> Self:
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    async def commit(self) -> None:
        ...
