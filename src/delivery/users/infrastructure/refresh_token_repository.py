"""
RefreshToken Repository Implementation
"""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from delivery.shared.domain.base_entity import utcnow
from delivery.shared.infrastructure.database.base_model import as_utc
from delivery.shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from delivery.shared.logging import get_logger
from delivery.users.domain.refresh_token import RefreshToken
from delivery.users.infrastructure.models import RefreshTokenModel

logger = get_logger(__name__)


class SQLAlchemyRefreshTokenRepository(SQLAlchemyRepository[RefreshToken, RefreshTokenModel]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=RefreshTokenModel, entity_class=RefreshToken)

    def _to_entity(self, model: RefreshTokenModel) -> RefreshToken:
        return RefreshToken(
            id=model.id,
            account_id=model.account_id,
            token_hash=model.token_hash,
            expires_at=as_utc(model.expires_at),
            revoked_at=as_utc(model.revoked_at),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: RefreshToken) -> RefreshTokenModel:
        return RefreshTokenModel(
            id=entity.id,
            account_id=entity.account_id,
            token_hash=entity.token_hash,
            expires_at=entity.expires_at,
            revoked_at=entity.revoked_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_hash(self, token_hash: str) -> Optional[RefreshToken]:
        return await self.find_one_where(RefreshTokenModel.token_hash == token_hash)

    async def revoke(self, token: RefreshToken) -> None:
        await self.update(token)

    async def revoke_all_for_account(self, account_id: UUID) -> int:
        """Revoke every outstanding token of the account; returns how many were revoked."""
        now = utcnow()
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.account_id == account_id,
                RefreshTokenModel.revoked_at.is_(None),
            )
            .values(revoked_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        count = result.rowcount or 0
        logger.debug("Revoked refresh tokens", account_id=str(account_id), count=count)
        return count
