from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from delivery import __version__
from delivery.config import Settings, get_settings
from delivery.shared.exceptions import register_exception_handlers  # central mapping
from delivery.shared.http.middleware import LoggingMiddleware, RequestIdMiddleware
from delivery.shared.infrastructure.database.session import DatabaseSessionFactory
from delivery.shared.logging import get_logger, setup_logging
from delivery.shared.security.passwords import Argon2PasswordHasher
from delivery.shared.security.tokens import JWTService

from delivery.addresses.api.routes import router as addresses_router
from delivery.stores.api.routes import (
    products_router,
    regions_router,
    stores_router,
)
from delivery.users.api.routes import router as users_router

logger = get_logger(__name__)


def _lifespan_for(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        database = DatabaseSessionFactory(
            settings.database_url,
            echo=settings.database_echo,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        await database.create_all()

        app.state.database = database
        logger.info("Application started", environment=settings.environment)
        try:
            yield
        finally:
            await database.dispose()
            logger.info("Application stopped")

    return lifespan


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Delivery Platform API",
        version=__version__,
        debug=settings.debug,
        lifespan=_lifespan_for(settings),
        swagger_ui_parameters={"persistAuthorization": True},
    )

    app.state.settings = settings
    app.state.password_hasher = Argon2PasswordHasher()
    app.state.jwt_service = JWTService(settings.secret_key, settings.jwt_algorithm)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last = runs first: request id is bound before the access log line
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    # Routers
    app.include_router(users_router)
    app.include_router(addresses_router)
    app.include_router(stores_router)
    app.include_router(products_router)
    app.include_router(regions_router)

    # Centralized error handling → {code, message, details?, correlation_id?}
    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok", "version": __version__}

    @app.get("/", tags=["root"])
    async def root():
        return {
            "message": "Delivery Platform API",
            "docs": "/docs",
            "health": "/health",
        }

    # ---- Custom OpenAPI to add Bearer auth ----
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )
        schema.setdefault("components", {}).setdefault("securitySchemes", {})["bearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
        schema["security"] = [{"bearerAuth": []}]
        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[method-assign]

    return app


app = create_app()
