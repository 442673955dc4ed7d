from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from delivery.stores.domain.store import Category


class CreateStoreBody(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=255)
    category: Category
    is_open: bool = True


class StoreResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    address: str
    category: Category
    is_open: bool
    created_at: datetime
    updated_at: datetime


class AddProductBody(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=2000)
    price: int = Field(..., ge=0, description="Price in minor currency units")
    hidden: bool = False


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    store_id: UUID
    name: str
    description: str
    price: int
    hidden: bool
    created_at: datetime
    updated_at: datetime


class RegionBody(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    store_id: UUID
    name: str = Field(..., min_length=1, max_length=100)


class RegionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    store_id: UUID
    name: str
    created_by: str
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime
