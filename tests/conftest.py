"""
tests.conftest

Shared fixtures: test settings, a booted app, an HTTP client and a raw DB session.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.api.app import create_app
from molla_api.auth.jwt import JwtConfig
from molla_api.db.init_db import init_db
from molla_api.db.session import create_engine, create_sessionmaker
from molla_api.settings import Settings

TEST_SECRET = "test-signing-secret-0123456789abcdef-0123"
PASSWORD = "Secret1!"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'molla-test.db'}",
        jwt_secret=TEST_SECRET,
        password_hash_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture
def jwt_cfg(settings: Settings) -> JwtConfig:
    return JwtConfig.from_settings(settings)


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not drive lifespan; run it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def session(settings: Settings) -> AsyncIterator[AsyncSession]:
    engine = create_engine(settings)
    await init_db(engine)
    async with create_sessionmaker(engine)() as s:
        yield s
    await engine.dispose()


@pytest.fixture
def signup(client: httpx.AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    async def _signup(email: str, role: str = "customer", password: str = PASSWORD) -> dict[str, Any]:
        r = await client.post(
            "/auth/signup",
            json={"email": email, "password": password, "full_name": "Test User", "role": role},
        )
        assert r.status_code == 201, r.text
        return r.json()

    return _signup
