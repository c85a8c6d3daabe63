"""
molla_api.services.products

Product service.

Responsibilities:
- Create/update/delete products behind the shared authority check.
- Keep SKUs unique and categories consistent with the owning store.
- List and keyword-search products of one store.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.auth.authority import check_authority
from molla_api.auth.models import Principal
from molla_api.db.models import Category, Product, Store, utcnow
from molla_api.db.repositories.categories import CategoryRepo
from molla_api.db.repositories.products import ProductRepo
from molla_api.db.repositories.stores import StoreRepo
from molla_api.errors import AlreadyExists, NotFound

_EDITABLE = ("name", "description", "sku", "mrp", "selling_price", "brand", "image")


class ProductService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._products = ProductRepo(session)
        self._stores = StoreRepo(session)
        self._categories = CategoryRepo(session)

    async def create(
        self,
        principal: Principal,
        *,
        store_id: int,
        category_id: int | None,
        fields: dict[str, Any],
    ) -> Product:
        store = await self._stores.get(store_id)
        check_authority(principal, store)
        category = await self._category_for(store, category_id)
        await self._ensure_sku_free(fields["sku"])

        product = Product(store=store, category=category)
        for field in _EDITABLE:
            if field in fields:
                setattr(product, field, fields[field])
        await self._products.save(product)
        await self._session.commit()
        return product

    async def get(self, product_id: int) -> Product:
        product = await self._products.get(product_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    async def update(
        self,
        product_id: int,
        principal: Principal,
        *,
        changes: dict[str, Any],
    ) -> Product:
        product = await self.get(product_id)
        check_authority(principal, product.store)

        store = product.store
        if changes.get("store_id") is not None and changes["store_id"] != product.store_id:
            # Moving a product needs authority over the destination too.
            store = await self._stores.get(changes["store_id"])
            check_authority(principal, store)
            product.store = store
            if product.category is not None and product.category.store_id != store.id:
                product.category = None
        if "category_id" in changes:
            product.category = await self._category_for(store, changes["category_id"])
        if changes.get("sku") is not None and changes["sku"] != product.sku:
            await self._ensure_sku_free(changes["sku"])

        for field in _EDITABLE:
            if field in changes and changes[field] is not None:
                setattr(product, field, changes[field])
        product.updated_at = utcnow()
        await self._products.save(product)
        await self._session.commit()
        return product

    async def delete(self, product_id: int, principal: Principal) -> None:
        product = await self.get(product_id)
        check_authority(principal, product.store)
        await self._products.delete(product)
        await self._session.commit()

    async def list_for_store(self, store_id: int) -> list[Product]:
        return await self._products.list_for_store(store_id)

    async def search(self, store_id: int, keyword: str) -> list[Product]:
        return await self._products.search(store_id, keyword)

    async def _category_for(self, store: Store, category_id: int | None) -> Category | None:
        if category_id is None:
            return None
        category = await self._categories.get(category_id)
        # A category of another store is treated as absent.
        if category is None or category.store_id != store.id:
            raise NotFound("Category not found")
        return category

    async def _ensure_sku_free(self, sku: str) -> None:
        if await self._products.get_by_sku(sku) is not None:
            raise AlreadyExists("Product with this SKU already exists")
