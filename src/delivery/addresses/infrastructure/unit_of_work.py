from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from delivery.addresses.infrastructure.repository import SQLAlchemyDeliveryAddressRepository
from delivery.shared.infrastructure.database.unit_of_work import SQLAlchemyUnitOfWork
from delivery.users.infrastructure.account_repository import SQLAlchemyAccountRepository


class SQLAlchemyAddressesUnitOfWork(SQLAlchemyUnitOfWork):
    accounts: SQLAlchemyAccountRepository
    addresses: SQLAlchemyDeliveryAddressRepository

    def _init_repositories(self, session: AsyncSession) -> None:
        self.accounts = SQLAlchemyAccountRepository(session)
        self.addresses = SQLAlchemyDeliveryAddressRepository(session)
