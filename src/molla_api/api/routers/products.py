"""
molla_api.api.routers.products

Product endpoints.

Responsibilities:
- Create/update/delete products (authority-checked in the service).
- List and keyword-search products of one store.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.api.deps import db_session
from molla_api.api.schemas import MessageOut, ProductOut
from molla_api.auth.deps import get_principal
from molla_api.auth.models import Principal
from molla_api.services.products import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


class ProductCreateRequest(BaseModel):
    store_id: int
    category_id: int | None = None
    name: str = Field(min_length=1, max_length=256)
    sku: str = Field(min_length=1, max_length=128)
    description: str | None = None
    mrp: float | None = Field(default=None, ge=0)
    selling_price: float | None = Field(default=None, ge=0)
    brand: str | None = Field(default=None, max_length=256)
    image: str | None = Field(default=None, max_length=1024)


class ProductUpdateRequest(BaseModel):
    store_id: int | None = None
    category_id: int | None = None
    name: str | None = Field(default=None, min_length=1, max_length=256)
    sku: str | None = Field(default=None, min_length=1, max_length=128)
    description: str | None = None
    mrp: float | None = Field(default=None, ge=0)
    selling_price: float | None = Field(default=None, ge=0)
    brand: str | None = Field(default=None, max_length=256)
    image: str | None = Field(default=None, max_length=1024)


@router.post("", response_model=ProductOut)
async def create_product(
    body: ProductCreateRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ProductOut:
    product = await ProductService(session=session).create(
        principal,
        store_id=body.store_id,
        category_id=body.category_id,
        fields=body.model_dump(exclude={"store_id", "category_id"}),
    )
    return ProductOut.from_model(product)


@router.put("/{product_id}", response_model=ProductOut)
async def update_product(
    product_id: int,
    body: ProductUpdateRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ProductOut:
    product = await ProductService(session=session).update(
        product_id, principal, changes=body.model_dump(exclude_unset=True)
    )
    return ProductOut.from_model(product)


@router.delete("/{product_id}", response_model=MessageOut)
async def delete_product(
    product_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> MessageOut:
    await ProductService(session=session).delete(product_id, principal)
    return MessageOut(message="Product deleted successfully")


@router.get("/store/{store_id}", response_model=list[ProductOut])
async def list_products(
    store_id: int, session: AsyncSession = Depends(db_session)
) -> list[ProductOut]:
    products = await ProductService(session=session).list_for_store(store_id)
    return [ProductOut.from_model(p) for p in products]


@router.get("/search/{store_id}", response_model=list[ProductOut])
async def search_products(
    store_id: int,
    q: str = Query(min_length=1, max_length=128),
    session: AsyncSession = Depends(db_session),
) -> list[ProductOut]:
    products = await ProductService(session=session).search(store_id, q)
    return [ProductOut.from_model(p) for p in products]
