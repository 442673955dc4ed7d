"""
Catalog ORM Models
Maps to the stores, products and regions tables
"""
from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, Enum, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from delivery.shared.infrastructure.database.base_model import Base
from delivery.stores.domain.store import Category


class StoreModel(Base):
    __tablename__ = "stores"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[Category] = mapped_column(
        Enum(Category, name="store_category", native_enum=False, length=20),
        nullable=False,
    )
    is_open: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    deleted_at: Mapped[datetime | None] = mapped_column(nullable=True, index=True)
    deleted_by: Mapped[str | None] = mapped_column(String(50), nullable=True)


class ProductModel(Base):
    __tablename__ = "products"
    __table_args__ = (
        # product names are unique per store among non-deleted rows
        Index(
            "uq_products_store_name_active",
            "store_id",
            "name",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    store_id: Mapped[UUID] = mapped_column(
        ForeignKey("stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[str | None] = mapped_column(String(50), nullable=True)

    deleted_at: Mapped[datetime | None] = mapped_column(nullable=True, index=True)
    deleted_by: Mapped[str | None] = mapped_column(String(50), nullable=True)


class RegionModel(Base):
    __tablename__ = "regions"

    store_id: Mapped[UUID] = mapped_column(
        ForeignKey("stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    created_by: Mapped[str] = mapped_column(String(50), nullable=False)
    updated_by: Mapped[str | None] = mapped_column(String(50), nullable=True)

    deleted_at: Mapped[datetime | None] = mapped_column(nullable=True, index=True)
    deleted_by: Mapped[str | None] = mapped_column(String(50), nullable=True)
