"""
SQLAlchemy Implementation of Generic Repository
Concrete async repository using SQLAlchemy 2.x
"""
from __future__ import annotations

from typing import Any, Generic, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.shared.domain.base_entity import BaseEntity
from delivery.shared.domain.pagination import Page, PageRequest
from delivery.shared.infrastructure.database.base_model import Base
from delivery.shared.logging import get_logger

logger = get_logger(__name__)

TEntity = TypeVar("TEntity", bound=BaseEntity)
TModel = TypeVar("TModel", bound=Base)


class SQLAlchemyRepository(Generic[TEntity, TModel]):
    """
    Generic async SQLAlchemy repository implementation.

    Provides CRUD operations for domain entities by mapping to/from ORM models.
    Subclasses implement `_to_entity` / `_to_model`.

    Attributes:
        session: Async SQLAlchemy session (owned by the unit of work)
        model_class: ORM model class
        entity_class: Domain entity class
    """

    def __init__(
        self,
        session: AsyncSession,
        model_class: Type[TModel],
        entity_class: Type[TEntity],
    ) -> None:
        self.session = session
        self.model_class = model_class
        self.entity_class = entity_class

    def _to_entity(self, model: TModel) -> TEntity:
        raise NotImplementedError("Subclass must implement _to_entity")

    def _to_model(self, entity: TEntity) -> TModel:
        raise NotImplementedError("Subclass must implement _to_model")

    async def add(self, entity: TEntity) -> TEntity:
        """Insert a new entity and return it as persisted."""
        try:
            model = self._to_model(entity)
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            logger.debug(f"Added {self.entity_class.__name__}", entity_id=str(entity.id))
            return self._to_entity(model)
        except Exception as e:
            logger.error(
                f"Failed to add {self.entity_class.__name__}",
                error=str(e),
                entity_id=str(entity.id),
            )
            raise

    async def get_by_id(self, entity_id: UUID) -> TEntity | None:
        """Retrieve entity by its unique identifier, or None."""
        stmt = select(self.model_class).where(self.model_class.id == entity_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            logger.debug(f"{self.entity_class.__name__} not found", entity_id=str(entity_id))
            return None
        return self._to_entity(model)

    async def update(self, entity: TEntity) -> TEntity:
        """Persist the current state of an existing entity."""
        try:
            model = self._to_model(entity)
            merged = await self.session.merge(model)
            await self.session.flush()
            await self.session.refresh(merged)

            logger.debug(f"Updated {self.entity_class.__name__}", entity_id=str(entity.id))
            return self._to_entity(merged)
        except Exception as e:
            logger.error(
                f"Failed to update {self.entity_class.__name__}",
                error=str(e),
                entity_id=str(entity.id),
            )
            raise

    async def find_one_where(self, *criteria: ColumnElement[bool]) -> TEntity | None:
        stmt = select(self.model_class).where(*criteria).limit(1)
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model is not None else None

    async def find_all_where(
        self,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
    ) -> list[TEntity]:
        stmt = select(self.model_class).where(*criteria).order_by(*order_by)
        result = await self.session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def count_where(self, *criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(self.model_class).where(*criteria)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def exists_where(self, *criteria: ColumnElement[bool]) -> bool:
        return await self.count_where(*criteria) > 0

    async def paginate(
        self,
        criteria: Sequence[ColumnElement[bool]],
        order_by: Sequence[Any],
        page_request: PageRequest,
    ) -> Page[TEntity]:
        """Run a filtered, ordered query and return one page plus the total count."""
        try:
            total = await self.count_where(*criteria)
            stmt = (
                select(self.model_class)
                .where(*criteria)
                .order_by(*order_by)
                .offset(page_request.offset)
                .limit(page_request.size)
            )
            result = await self.session.execute(stmt)
            items = [self._to_entity(m) for m in result.scalars().all()]
            return Page(items=items, total=total, page=page_request.page, size=page_request.size)
        except Exception as e:
            logger.error(
                f"Failed to paginate {self.entity_class.__name__} entities",
                error=str(e),
                page=page_request.page,
                size=page_request.size,
            )
            raise
