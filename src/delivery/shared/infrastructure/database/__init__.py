"""
Shared Database Infrastructure
Session management, repositories and UoW
"""
from delivery.shared.infrastructure.database.base_model import Base, as_utc
from delivery.shared.infrastructure.database.session import DatabaseSessionFactory
from delivery.shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from delivery.shared.infrastructure.database.unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    "Base",
    "as_utc",
    "DatabaseSessionFactory",
    "SQLAlchemyRepository",
    "SQLAlchemyUnitOfWork",
]
