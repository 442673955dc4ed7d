from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from delivery.stores.domain.product import Product
from delivery.stores.domain.region import Region
from delivery.stores.domain.store import Category, Store


@dataclass(frozen=True)
class CreateStoreRequest:
    name: str
    address: str
    category: Category
    is_open: bool = True


@dataclass(frozen=True)
class StoreView:
    id: UUID
    name: str
    address: str
    category: Category
    is_open: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, store: Store) -> StoreView:
        return cls(
            id=store.id,
            name=store.name,
            address=store.address,
            category=store.category,
            is_open=store.is_open,
            created_at=store.created_at,
            updated_at=store.updated_at,
        )


@dataclass(frozen=True)
class AddProductRequest:
    name: str
    price: int
    description: str = ""
    hidden: bool = False


@dataclass(frozen=True)
class ProductView:
    id: UUID
    store_id: UUID
    name: str
    description: str
    price: int
    hidden: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductView:
        return cls(
            id=product.id,
            store_id=product.store_id,
            name=product.name,
            description=product.description,
            price=product.price,
            hidden=product.hidden,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


@dataclass(frozen=True)
class RegionRequest:
    store_id: UUID
    name: str


@dataclass(frozen=True)
class RegionView:
    id: UUID
    store_id: UUID
    name: str
    created_by: str
    updated_by: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, region: Region) -> RegionView:
        return cls(
            id=region.id,
            store_id=region.store_id,
            name=region.name,
            created_by=region.created_by,
            updated_by=region.updated_by,
            created_at=region.created_at,
            updated_at=region.updated_at,
        )
