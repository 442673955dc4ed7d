# src/delivery/dependencies.py
"""
Request-scoped wiring: settings, database, security services and the
application services built on them. Everything hangs off `app.state`,
populated in the application lifespan (see delivery.main).
"""
from __future__ import annotations

from datetime import timedelta

from fastapi import Depends, Request

from delivery.addresses.application.address_service import AddressService
from delivery.addresses.infrastructure.unit_of_work import SQLAlchemyAddressesUnitOfWork
from delivery.config import Settings
from delivery.shared.infrastructure.database.session import DatabaseSessionFactory
from delivery.shared.security.passwords import Argon2PasswordHasher
from delivery.shared.security.tokens import JWTService
from delivery.stores.application.product_service import ProductService
from delivery.stores.application.region_service import RegionService
from delivery.stores.application.store_service import StoreService
from delivery.stores.infrastructure.unit_of_work import SQLAlchemyStoresUnitOfWork
from delivery.users.application.account_service import AccountService
from delivery.users.infrastructure.unit_of_work import SQLAlchemyUsersUnitOfWork


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> DatabaseSessionFactory:
    return request.app.state.database


def get_password_hasher(request: Request) -> Argon2PasswordHasher:
    return request.app.state.password_hasher


def get_jwt_service(request: Request) -> JWTService:
    return request.app.state.jwt_service


def get_account_service(
    settings: Settings = Depends(get_settings_dep),
    database: DatabaseSessionFactory = Depends(get_database),
    hasher: Argon2PasswordHasher = Depends(get_password_hasher),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> AccountService:
    return AccountService(
        uow_factory=lambda: SQLAlchemyUsersUnitOfWork(database),
        hasher=hasher,
        tokens=jwt_service,
        access_ttl=timedelta(minutes=settings.access_token_exp_minutes),
        refresh_ttl=timedelta(minutes=settings.refresh_token_exp_minutes),
        email_matches_username=settings.search_email_matches_username,
        empty_search_is_not_found=settings.search_empty_is_not_found,
    )


def get_address_service(database: DatabaseSessionFactory = Depends(get_database)) -> AddressService:
    return AddressService(uow_factory=lambda: SQLAlchemyAddressesUnitOfWork(database))


def get_store_service(database: DatabaseSessionFactory = Depends(get_database)) -> StoreService:
    return StoreService(uow_factory=lambda: SQLAlchemyStoresUnitOfWork(database))


def get_product_service(database: DatabaseSessionFactory = Depends(get_database)) -> ProductService:
    return ProductService(uow_factory=lambda: SQLAlchemyStoresUnitOfWork(database))


def get_region_service(database: DatabaseSessionFactory = Depends(get_database)) -> RegionService:
    return RegionService(uow_factory=lambda: SQLAlchemyStoresUnitOfWork(database))
