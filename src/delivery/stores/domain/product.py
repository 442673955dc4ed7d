from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Optional
from uuid import UUID

from delivery.stores.domain.catalog_entity import CatalogEntity


class ProductSortField(StrEnum):
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    PRICE = "price"


class Product(CatalogEntity):
    """
    A menu item of one store. Names are unique per store among non-deleted products.

    Attributes:
        price: Minor currency units, never negative
        hidden: Listed or not
    """

    def __init__(
        self,
        store_id: UUID,
        name: str,
        price: int,
        description: str = "",
        hidden: bool = False,
        created_by: Optional[str] = None,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        deleted_at: Optional[datetime] = None,
        deleted_by: Optional[str] = None,
    ) -> None:
        super().__init__(id, created_at, updated_at, deleted_at, deleted_by)
        if price < 0:
            raise ValueError("price must be >= 0")
        self.store_id = store_id
        self.name = name
        self.price = price
        self.description = description
        self.hidden = hidden
        self.created_by = created_by
