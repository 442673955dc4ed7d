from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from delivery.shared.infrastructure.database.base_model import Base


class DeliveryAddressModel(Base):
    __tablename__ = "delivery_addresses"
    __table_args__ = (
        UniqueConstraint("account_id", "delivery_address", name="uq_delivery_addresses_account_address"),
    )

    account_id: Mapped[UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    delivery_address: Mapped[str] = mapped_column(String(255), nullable=False)
    delivery_address_info: Mapped[str] = mapped_column(String(255), nullable=False)
    detail_address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
