"""
molla_api.db.init_db

Schema bootstrap for local development and tests.

Responsibilities:
- Create all tables (users, stores, categories, products) on an empty database.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from molla_api.db import models  # noqa: F401  # register models on Base.metadata
from molla_api.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Idempotent: existing tables are left untouched.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# --- Module Notes -----------------------------------------------------------
# `prod` never calls this; schema changes there go through `alembic upgrade head`.
