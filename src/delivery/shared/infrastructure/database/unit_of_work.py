"""
Unit of Work
Manages database transactions with async SQLAlchemy sessions
"""
from __future__ import annotations

from typing import Any, Callable, Self

from sqlalchemy.ext.asyncio import AsyncSession

from delivery.shared.logging import get_logger

logger = get_logger(__name__)


class SQLAlchemyUnitOfWork:
    """
    SQLAlchemy-based Unit of Work.

    Opens one session per context, so every repository created in
    `_init_repositories` shares one transaction. Anything not committed
    explicitly is rolled back on exit.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._committed = False

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork used outside of its async context")
        return self._session

    def _init_repositories(self, session: AsyncSession) -> None:
        """Create the repositories bound to this session (override in subclasses)."""

    async def __aenter__(self) -> Self:
        self._session = self._session_factory()
        self._committed = False
        if not self._session.in_transaction():
            await self._session.begin()
        self._init_repositories(self._session)

        logger.debug("UnitOfWork transaction started")
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            if exc_type is not None:
                await self.rollback()
                logger.debug(
                    "UnitOfWork rolled back due to exception",
                    exception=exc_type.__name__,
                )
            elif not self._committed:
                await self.rollback()
                logger.debug("UnitOfWork rolled back (not committed)")
        finally:
            await self.session.close()
            self._session = None

    async def commit(self) -> None:
        try:
            await self.session.commit()
            self._committed = True
            logger.debug("UnitOfWork transaction committed")
        except Exception as e:
            await self.rollback()
            logger.error("UnitOfWork commit failed", error=str(e))
            raise

    async def rollback(self) -> None:
        await self.session.rollback()
        self._committed = False
