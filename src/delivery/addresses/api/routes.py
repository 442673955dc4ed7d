# src/delivery/addresses/api/routes.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from delivery.addresses.api.schemas import AddAddressBody, AddressResponse
from delivery.addresses.application.address_service import AddAddressRequest, AddressService
from delivery.dependencies import get_address_service
from delivery.shared.api.response_models import ERROR_RESPONSES
from delivery.users.api.dependencies import CurrentActor

router = APIRouter(prefix="/api/address", tags=["addresses"], responses=ERROR_RESPONSES)

Service = Annotated[AddressService, Depends(get_address_service)]


@router.post("", response_model=AddressResponse, status_code=status.HTTP_201_CREATED)
async def add_address(payload: AddAddressBody, service: Service, actor: CurrentActor) -> AddressResponse:
    view = await service.add_address(
        actor,
        AddAddressRequest(
            delivery_address=payload.delivery_address,
            delivery_address_info=payload.delivery_address_info,
            detail_address=payload.detail_address,
        ),
    )
    return AddressResponse.model_validate(view)


@router.get("", response_model=list[AddressResponse])
async def list_addresses(service: Service, actor: CurrentActor) -> list[AddressResponse]:
    return [AddressResponse.model_validate(v) for v in await service.list_addresses(actor)]
