from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from delivery.shared.infrastructure.database.unit_of_work import SQLAlchemyUnitOfWork
from delivery.stores.infrastructure.repositories import (
    SQLAlchemyProductRepository,
    SQLAlchemyRegionRepository,
    SQLAlchemyStoreRepository,
)


class SQLAlchemyStoresUnitOfWork(SQLAlchemyUnitOfWork):
    stores: SQLAlchemyStoreRepository
    products: SQLAlchemyProductRepository
    regions: SQLAlchemyRegionRepository

    def _init_repositories(self, session: AsyncSession) -> None:
        self.stores = SQLAlchemyStoreRepository(session)
        self.products = SQLAlchemyProductRepository(session)
        self.regions = SQLAlchemyRegionRepository(session)
