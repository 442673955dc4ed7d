"""
Product Service
"""
from __future__ import annotations

from typing import Callable, Optional
from uuid import UUID

from delivery.shared.domain.pagination import Page, PageRequest, SortDirection
from delivery.shared.exceptions import ConflictError, InvalidArgumentError
from delivery.shared.logging import get_logger
from delivery.stores.application.dto import AddProductRequest, ProductView
from delivery.stores.application.store_service import store_not_found
from delivery.stores.domain.exceptions import DuplicateProductError
from delivery.stores.domain.product import Product, ProductSortField
from delivery.stores.domain.repositories import StoresUnitOfWork
from delivery.users.domain import access_policy
from delivery.users.domain.access_policy import AccessOperation, Actor

logger = get_logger(__name__)

PRODUCT_SORT_ERROR = "SortBy must be one of the allowed values: " + ", ".join(f.value for f in ProductSortField)


def _duplicate_product(name: str) -> ConflictError:
    return ConflictError(f"Product already exists in this store : {name}")


class ProductService:
    def __init__(self, uow_factory: Callable[[], StoresUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def add_product_to_store(self, store_id: UUID, request: AddProductRequest, actor: Actor) -> ProductView:
        """
        Raises:
            ForbiddenError: caller is not a MANAGER or MASTER
            NotFoundError: store missing or deleted
            ConflictError: the store already lists a product with this name
        """
        access_policy.require(actor, None, AccessOperation.MANAGE_CATALOG)

        async with self._uow_factory() as uow:
            store = await uow.stores.find_active_by_id(store_id)
            if store is None:
                raise store_not_found(store_id)

            if await uow.products.exists_active_by_name_in_store(request.name, store.id):
                raise _duplicate_product(request.name)

            try:
                product = await uow.products.add(
                    Product(
                        store_id=store.id,
                        name=request.name,
                        price=request.price,
                        description=request.description,
                        hidden=request.hidden,
                        created_by=actor.username,
                    )
                )
            except DuplicateProductError:
                raise _duplicate_product(request.name)
            await uow.commit()

        logger.info("Product added", store_id=str(store_id), product_id=str(product.id), actor=actor.username)
        return ProductView.from_entity(product)

    async def list_products(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = ProductSortField.CREATED_AT.value,
        order: Optional[str] = "desc",
    ) -> Page[ProductView]:
        try:
            sort_field = ProductSortField(sort_by)
        except ValueError:
            raise InvalidArgumentError(PRODUCT_SORT_ERROR, details={"sort_by": sort_by})
        try:
            page_request = PageRequest(page=page, size=size)
        except ValueError as e:
            raise InvalidArgumentError(str(e))

        async with self._uow_factory() as uow:
            result = await uow.products.list_active(page_request, sort_field, SortDirection.parse(order))

        return Page(
            items=[ProductView.from_entity(p) for p in result.items],
            total=result.total,
            page=result.page,
            size=result.size,
        )
