"""
molla_api.services.categories

Category service: store-scoped CRUD behind the shared authority check.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.auth.authority import check_authority
from molla_api.auth.models import Principal
from molla_api.db.models import Category
from molla_api.db.repositories.categories import CategoryRepo
from molla_api.db.repositories.products import ProductRepo
from molla_api.db.repositories.stores import StoreRepo
from molla_api.errors import NotFound


class CategoryService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._categories = CategoryRepo(session)
        self._stores = StoreRepo(session)

    async def create(
        self,
        principal: Principal,
        *,
        store_id: int,
        name: str,
        description: str | None = None,
    ) -> Category:
        # An unresolved store fails the authority check (Forbidden).
        store = await self._stores.get(store_id)
        check_authority(principal, store)

        category = Category(name=name, description=description, store=store)
        await self._categories.save(category)
        await self._session.commit()
        return category

    async def get(self, category_id: int) -> Category:
        category = await self._categories.get(category_id)
        if category is None:
            raise NotFound("Category not found")
        return category

    async def list_for_store(self, store_id: int) -> list[Category]:
        return await self._categories.list_for_store(store_id)

    async def update(
        self,
        category_id: int,
        principal: Principal,
        *,
        name: str,
        description: str | None = None,
    ) -> Category:
        category = await self.get(category_id)
        check_authority(principal, category.store)

        category.name = name
        if description is not None:
            category.description = description
        await self._categories.save(category)
        await self._session.commit()
        return category

    async def delete(self, category_id: int, principal: Principal) -> None:
        category = await self.get(category_id)
        check_authority(principal, category.store)

        await ProductRepo(self._session).clear_category(category.id)
        await self._categories.delete(category)
        await self._session.commit()
