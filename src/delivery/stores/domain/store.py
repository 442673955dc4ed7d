from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Optional
from uuid import UUID

from delivery.stores.domain.catalog_entity import CatalogEntity


class Category(StrEnum):
    KOREAN = "KOREAN"
    CHINESE = "CHINESE"
    JAPANESE = "JAPANESE"
    WESTERN = "WESTERN"
    CHICKEN = "CHICKEN"
    PIZZA = "PIZZA"
    SNACK = "SNACK"
    DESSERT = "DESSERT"


class Store(CatalogEntity):
    def __init__(
        self,
        name: str,
        address: str,
        category: Category,
        is_open: bool = True,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        deleted_at: Optional[datetime] = None,
        deleted_by: Optional[str] = None,
    ) -> None:
        super().__init__(id, created_at, updated_at, deleted_at, deleted_by)
        self.name = name
        self.address = address
        self.category = category
        self.is_open = is_open
