from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from delivery.shared.domain.base_entity import BaseEntity, utcnow


class CatalogEntity(BaseEntity):
    """Base for stores, products and regions: soft-deleted with the deleting user recorded."""

    def __init__(
        self,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        deleted_at: Optional[datetime] = None,
        deleted_by: Optional[str] = None,
    ) -> None:
        super().__init__(id, created_at, updated_at)
        self.deleted_at = deleted_at
        self.deleted_by = deleted_by

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self, by: str, at: Optional[datetime] = None) -> None:
        self.deleted_at = at or utcnow()
        self.deleted_by = by
        self.mark_updated()
