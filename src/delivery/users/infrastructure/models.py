"""
Account ORM Models
Maps to the accounts and refresh_tokens tables
"""
from datetime import datetime
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from delivery.shared.infrastructure.database.base_model import Base
from delivery.users.domain.role import Role


class AccountModel(Base):
    """
    Soft-deleted rows keep their username, so the unique constraint spans
    every account ever registered.
    """

    __tablename__ = "accounts"

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    nickname: Mapped[str] = mapped_column(String(50), nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="account_role", native_enum=False, length=20),
        nullable=False,
        default=Role.CUSTOMER,
        index=True,
    )

    # Soft delete
    deleted_at: Mapped[datetime | None] = mapped_column(nullable=True, index=True)
    deleted_by: Mapped[str | None] = mapped_column(String(50), nullable=True)


class RefreshTokenModel(Base):
    __tablename__ = "refresh_tokens"

    account_id: Mapped[UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(nullable=True)
