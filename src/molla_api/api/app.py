"""
molla_api.api.app

FastAPI app factory for the Molla store backend.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from molla_api import __version__
from molla_api.api.errors import register_exception_handlers
from molla_api.api.routers.auth import router as auth_router
from molla_api.api.routers.categories import router as categories_router
from molla_api.api.routers.health import router as health_router
from molla_api.api.routers.products import router as products_router
from molla_api.api.routers.stores import router as stores_router
from molla_api.api.routers.users import admin_router as super_admin_router
from molla_api.api.routers.users import router as users_router
from molla_api.auth.gatekeeper import GatekeeperMiddleware
from molla_api.auth.jwt import JwtConfig
from molla_api.auth.policy import RoutePolicyMiddleware
from molla_api.db.init_db import init_db
from molla_api.db.session import create_engine, create_sessionmaker
from molla_api.observability.logging import configure_logging, get_logger
from molla_api.observability.middleware import RequestContextMiddleware
from molla_api.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name, env=settings.env, level=settings.log_level
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod uses Alembic.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Molla Store API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Starlette runs the last-added middleware first:
    # CORS -> request context -> gatekeeper -> route policy -> routers.
    app.add_middleware(RoutePolicyMiddleware)
    app.add_middleware(GatekeeperMiddleware, jwt_config=JwtConfig.from_settings(settings))
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(super_admin_router)
    app.include_router(stores_router)
    app.include_router(categories_router)
    app.include_router(products_router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; business logic stays
# in services and the auth package.
