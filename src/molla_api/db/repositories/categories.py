from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.db.models import Category


class CategoryRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, category_id: int) -> Category | None:
        return await self._session.get(Category, category_id)

    async def list_for_store(self, store_id: int) -> list[Category]:
        stmt = select(Category).where(Category.store_id == store_id).order_by(Category.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def save(self, category: Category) -> Category:
        self._session.add(category)
        await self._session.flush()
        return category

    async def delete(self, category: Category) -> None:
        await self._session.delete(category)
        await self._session.flush()

    async def delete_for_store(self, store_id: int) -> None:
        await self._session.execute(delete(Category).where(Category.store_id == store_id))
