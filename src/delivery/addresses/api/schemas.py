from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AddAddressBody(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    delivery_address: str = Field(..., min_length=1, max_length=255, description="Street-level address")
    delivery_address_info: str = Field(..., min_length=1, max_length=255, description="Label or delivery notes")
    detail_address: Optional[str] = Field(None, max_length=255, description="Unit/floor details")


class AddressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    account_id: UUID
    delivery_address: str
    delivery_address_info: str
    detail_address: str
    created_at: datetime
