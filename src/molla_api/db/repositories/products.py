"""
molla_api.db.repositories.products

Repository for `Product` entities.

Responsibilities:
- CRUD for products, listing and keyword search scoped to one store.
"""

from __future__ import annotations

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.db.models import Product


class ProductRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, product_id: int) -> Product | None:
        return await self._session.get(Product, product_id)

    async def get_by_sku(self, sku: str) -> Product | None:
        stmt = select(Product).where(Product.sku == sku)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_for_store(self, store_id: int) -> list[Product]:
        stmt = select(Product).where(Product.store_id == store_id).order_by(Product.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def search(self, store_id: int, keyword: str) -> list[Product]:
        # Case-insensitive substring match on name, brand or sku; `%` and `_` are literal.
        stmt = (
            select(Product)
            .where(
                Product.store_id == store_id,
                or_(
                    Product.name.icontains(keyword, autoescape=True),
                    Product.brand.icontains(keyword, autoescape=True),
                    Product.sku.icontains(keyword, autoescape=True),
                ),
            )
            .order_by(Product.id)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def save(self, product: Product) -> Product:
        self._session.add(product)
        await self._session.flush()
        return product

    async def delete(self, product: Product) -> None:
        await self._session.delete(product)
        await self._session.flush()

    async def delete_for_store(self, store_id: int) -> None:
        await self._session.execute(delete(Product).where(Product.store_id == store_id))

    async def clear_category(self, category_id: int) -> None:
        await self._session.execute(
            update(Product).where(Product.category_id == category_id).values(category_id=None)
        )
