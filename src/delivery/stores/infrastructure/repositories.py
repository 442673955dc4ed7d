"""
Store, Product and Region Repository Implementations
"""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.shared.domain.pagination import Page, PageRequest, SortDirection
from delivery.shared.infrastructure.database.base_model import as_utc
from delivery.shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from delivery.stores.domain.exceptions import DuplicateProductError
from delivery.stores.domain.product import Product, ProductSortField
from delivery.stores.domain.region import Region
from delivery.stores.domain.store import Store
from delivery.stores.infrastructure.models import ProductModel, RegionModel, StoreModel

_PRODUCT_NAME_UNIQUE = "uq_products_store_name_active"

_PRODUCT_SORT_COLUMNS = {
    ProductSortField.CREATED_AT: ProductModel.created_at,
    ProductSortField.UPDATED_AT: ProductModel.updated_at,
    ProductSortField.PRICE: ProductModel.price,
}


class SQLAlchemyStoreRepository(SQLAlchemyRepository[Store, StoreModel]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=StoreModel, entity_class=Store)

    def _to_entity(self, model: StoreModel) -> Store:
        return Store(
            id=model.id,
            name=model.name,
            address=model.address,
            category=model.category,
            is_open=model.is_open,
            deleted_at=as_utc(model.deleted_at),
            deleted_by=model.deleted_by,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: Store) -> StoreModel:
        return StoreModel(
            id=entity.id,
            name=entity.name,
            address=entity.address,
            category=entity.category,
            is_open=entity.is_open,
            deleted_at=entity.deleted_at,
            deleted_by=entity.deleted_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def find_active_by_id(self, store_id: UUID) -> Optional[Store]:
        return await self.find_one_where(StoreModel.id == store_id, StoreModel.deleted_at.is_(None))


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product, ProductModel]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=ProductModel, entity_class=Product)

    def _to_entity(self, model: ProductModel) -> Product:
        return Product(
            id=model.id,
            store_id=model.store_id,
            name=model.name,
            description=model.description,
            price=model.price,
            hidden=model.hidden,
            created_by=model.created_by,
            deleted_at=as_utc(model.deleted_at),
            deleted_by=model.deleted_by,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: Product) -> ProductModel:
        return ProductModel(
            id=entity.id,
            store_id=entity.store_id,
            name=entity.name,
            description=entity.description,
            price=entity.price,
            hidden=entity.hidden,
            created_by=entity.created_by,
            deleted_at=entity.deleted_at,
            deleted_by=entity.deleted_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def add(self, product: Product) -> Product:
        try:
            return await super().add(product)
        except IntegrityError as e:
            message = str(e.orig).lower()
            if _PRODUCT_NAME_UNIQUE in message or "products.name" in message:
                raise DuplicateProductError(product.name) from e
            raise

    async def exists_active_by_name_in_store(self, name: str, store_id: UUID) -> bool:
        return await self.exists_where(
            ProductModel.store_id == store_id,
            ProductModel.name == name,
            ProductModel.deleted_at.is_(None),
        )

    async def list_active(
        self,
        page_request: PageRequest,
        sort_by: ProductSortField,
        direction: SortDirection,
    ) -> Page[Product]:
        column = _PRODUCT_SORT_COLUMNS[sort_by]
        if direction is SortDirection.DESC:
            order_by = [column.desc(), ProductModel.id.desc()]
        else:
            order_by = [column.asc(), ProductModel.id.asc()]
        return await self.paginate(
            criteria=[ProductModel.deleted_at.is_(None)],
            order_by=order_by,
            page_request=page_request,
        )


class SQLAlchemyRegionRepository(SQLAlchemyRepository[Region, RegionModel]):
    _ORDER = (RegionModel.created_at.asc(), RegionModel.updated_at.asc(), RegionModel.id.asc())

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=RegionModel, entity_class=Region)

    def _to_entity(self, model: RegionModel) -> Region:
        return Region(
            id=model.id,
            store_id=model.store_id,
            name=model.name,
            created_by=model.created_by,
            updated_by=model.updated_by,
            deleted_at=as_utc(model.deleted_at),
            deleted_by=model.deleted_by,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: Region) -> RegionModel:
        return RegionModel(
            id=entity.id,
            store_id=entity.store_id,
            name=entity.name,
            created_by=entity.created_by,
            updated_by=entity.updated_by,
            deleted_at=entity.deleted_at,
            deleted_by=entity.deleted_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def save(self, region: Region) -> Region:
        return await self.update(region)

    async def find_active_by_id(self, region_id: UUID) -> Optional[Region]:
        return await self.find_one_where(RegionModel.id == region_id, RegionModel.deleted_at.is_(None))

    async def list_active(self, page_request: PageRequest, store_id: Optional[UUID] = None) -> Page[Region]:
        criteria = [RegionModel.deleted_at.is_(None)]
        if store_id is not None:
            criteria.append(RegionModel.store_id == store_id)
        return await self.paginate(criteria=criteria, order_by=self._ORDER, page_request=page_request)

    async def search_active(self, keyword: str, page_request: PageRequest) -> Page[Region]:
        return await self.paginate(
            criteria=[
                RegionModel.deleted_at.is_(None),
                RegionModel.name.icontains(keyword, autoescape=True),
            ],
            order_by=self._ORDER,
            page_request=page_request,
        )
