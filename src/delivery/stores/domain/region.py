from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from delivery.stores.domain.catalog_entity import CatalogEntity


class Region(CatalogEntity):
    """An area a store delivers to."""

    def __init__(
        self,
        store_id: UUID,
        name: str,
        created_by: str,
        updated_by: Optional[str] = None,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        deleted_at: Optional[datetime] = None,
        deleted_by: Optional[str] = None,
    ) -> None:
        super().__init__(id, created_at, updated_at, deleted_at, deleted_by)
        self.store_id = store_id
        self.name = name
        self.created_by = created_by
        self.updated_by = updated_by

    def rename(self, name: str, by: str) -> None:
        self.name = name
        self.updated_by = by
        self.mark_updated()
