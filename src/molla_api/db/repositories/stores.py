"""
molla_api.db.repositories.stores

Repository for `Store` entities.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.db.models import Store


class StoreRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, store_id: int) -> Store | None:
        return await self._session.get(Store, store_id)

    async def list_all(self) -> list[Store]:
        stmt = select(Store).order_by(Store.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def find_by_admin_id(self, user_id: int) -> Store | None:
        # The schema allows several; creation logic keeps it to one per admin.
        stmt = select(Store).where(Store.store_admin_id == user_id).order_by(Store.id).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def save(self, store: Store) -> Store:
        self._session.add(store)
        await self._session.flush()
        return store

    async def delete(self, store: Store) -> None:
        await self._session.delete(store)
        await self._session.flush()
