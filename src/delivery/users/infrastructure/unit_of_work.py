from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from delivery.shared.infrastructure.database.unit_of_work import SQLAlchemyUnitOfWork
from delivery.users.infrastructure.account_repository import SQLAlchemyAccountRepository
from delivery.users.infrastructure.refresh_token_repository import SQLAlchemyRefreshTokenRepository


class SQLAlchemyUsersUnitOfWork(SQLAlchemyUnitOfWork):
    """Accounts and refresh tokens sharing one transaction."""

    accounts: SQLAlchemyAccountRepository
    refresh_tokens: SQLAlchemyRefreshTokenRepository

    def _init_repositories(self, session: AsyncSession) -> None:
        self.accounts = SQLAlchemyAccountRepository(session)
        self.refresh_tokens = SQLAlchemyRefreshTokenRepository(session)
