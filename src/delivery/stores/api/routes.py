# src/delivery/stores/api/routes.py
from __future__ import annotations

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from delivery.config import Settings
from delivery.dependencies import (
    get_product_service,
    get_region_service,
    get_settings_dep,
    get_store_service,
)
from delivery.shared.api.response_models import ERROR_RESPONSES, PaginatedResponse
from delivery.shared.domain.pagination import PageRequest
from delivery.shared.exceptions import InvalidArgumentError
from delivery.stores.api.schemas import (
    AddProductBody,
    CreateStoreBody,
    ProductResponse,
    RegionBody,
    RegionResponse,
    StoreResponse,
)
from delivery.stores.application.dto import AddProductRequest, CreateStoreRequest, RegionRequest
from delivery.stores.application.product_service import ProductService
from delivery.stores.application.region_service import RegionService
from delivery.stores.application.store_service import StoreService
from delivery.users.api.dependencies import CurrentActor

stores_router = APIRouter(prefix="/api/stores", tags=["stores"], responses=ERROR_RESPONSES)
products_router = APIRouter(prefix="/api/products", tags=["products"], responses=ERROR_RESPONSES)
regions_router = APIRouter(prefix="/api/region", tags=["regions"], responses=ERROR_RESPONSES)

Stores = Annotated[StoreService, Depends(get_store_service)]
Products = Annotated[ProductService, Depends(get_product_service)]
Regions = Annotated[RegionService, Depends(get_region_service)]
AppSettings = Annotated[Settings, Depends(get_settings_dep)]


def _page_request(page: int, size: Optional[int], settings: Settings) -> PageRequest:
    try:
        return PageRequest(page=page, size=min(size or settings.default_page_size, settings.max_page_size))
    except ValueError as e:
        raise InvalidArgumentError(str(e))


# ---- Stores ----

@stores_router.post("", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
async def create_store(payload: CreateStoreBody, service: Stores, actor: CurrentActor) -> StoreResponse:
    view = await service.create_store(
        actor,
        CreateStoreRequest(
            name=payload.name,
            address=payload.address,
            category=payload.category,
            is_open=payload.is_open,
        ),
    )
    return StoreResponse.model_validate(view)


@stores_router.get("/{store_id}", response_model=StoreResponse)
async def get_store(store_id: UUID, service: Stores, _actor: CurrentActor) -> StoreResponse:
    return StoreResponse.model_validate(await service.get_store(store_id))


# ---- Products ----

@products_router.post("/stores/{store_id}", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def add_product_to_store(
    store_id: UUID,
    payload: AddProductBody,
    service: Products,
    actor: CurrentActor,
) -> ProductResponse:
    view = await service.add_product_to_store(
        store_id,
        AddProductRequest(
            name=payload.name,
            price=payload.price,
            description=payload.description,
            hidden=payload.hidden,
        ),
        actor,
    )
    return ProductResponse.model_validate(view)


@products_router.get("", response_model=PaginatedResponse[ProductResponse])
async def list_products(
    service: Products,
    settings: AppSettings,
    _actor: CurrentActor,
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    sort_by: str = Query("createdAt", alias="sortBy"),
    order: Optional[str] = Query("desc"),
) -> PaginatedResponse[ProductResponse]:
    result = await service.list_products(
        page=page,
        size=min(size or settings.default_page_size, settings.max_page_size),
        sort_by=sort_by,
        order=order,
    )
    return PaginatedResponse[ProductResponse].from_page(result, ProductResponse.model_validate)


# ---- Regions ----

@regions_router.post("", response_model=RegionResponse, status_code=status.HTTP_201_CREATED)
async def create_region(payload: RegionBody, service: Regions, actor: CurrentActor) -> RegionResponse:
    view = await service.create_region(actor, RegionRequest(store_id=payload.store_id, name=payload.name))
    return RegionResponse.model_validate(view)


@regions_router.get("/search", response_model=PaginatedResponse[RegionResponse])
async def search_regions(
    service: Regions,
    settings: AppSettings,
    _actor: CurrentActor,
    keyword: str = Query(..., min_length=1, max_length=100),
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
) -> PaginatedResponse[RegionResponse]:
    result = await service.search_regions(keyword, _page_request(page, size, settings))
    return PaginatedResponse[RegionResponse].from_page(result, RegionResponse.model_validate)


@regions_router.get("/{store_id}", response_model=PaginatedResponse[RegionResponse])
async def list_regions_for_store(
    store_id: UUID,
    service: Regions,
    settings: AppSettings,
    _actor: CurrentActor,
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
) -> PaginatedResponse[RegionResponse]:
    result = await service.list_regions(_page_request(page, size, settings), store_id=store_id)
    return PaginatedResponse[RegionResponse].from_page(result, RegionResponse.model_validate)


@regions_router.get("", response_model=PaginatedResponse[RegionResponse])
async def list_regions(
    service: Regions,
    settings: AppSettings,
    _actor: CurrentActor,
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
) -> PaginatedResponse[RegionResponse]:
    result = await service.list_regions(_page_request(page, size, settings))
    return PaginatedResponse[RegionResponse].from_page(result, RegionResponse.model_validate)


@regions_router.put("/{region_id}", response_model=RegionResponse)
async def update_region(
    region_id: UUID,
    payload: RegionBody,
    service: Regions,
    actor: CurrentActor,
) -> RegionResponse:
    view = await service.update_region(region_id, RegionRequest(store_id=payload.store_id, name=payload.name), actor)
    return RegionResponse.model_validate(view)


@regions_router.patch("/{region_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_region(region_id: UUID, service: Regions, actor: CurrentActor) -> Response:
    await service.delete_region(region_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
