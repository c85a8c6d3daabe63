"""
molla_api.api.routers.categories

Category endpoints (store-scoped).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.api.deps import db_session
from molla_api.api.schemas import CategoryOut, MessageOut
from molla_api.auth.deps import get_principal, require_roles
from molla_api.auth.models import Principal, UserRole
from molla_api.services.categories import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])


class CategoryCreateRequest(BaseModel):
    store_id: int
    name: str = Field(min_length=1, max_length=256)
    description: str | None = None


class CategoryUpdateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    description: str | None = None


@router.post("", response_model=CategoryOut)
async def create_category(
    body: CategoryCreateRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> CategoryOut:
    category = await CategoryService(session=session).create(
        principal, store_id=body.store_id, name=body.name, description=body.description
    )
    return CategoryOut.from_model(category)


@router.get("/store/{store_id}", response_model=list[CategoryOut])
async def list_categories(
    store_id: int, session: AsyncSession = Depends(db_session)
) -> list[CategoryOut]:
    categories = await CategoryService(session=session).list_for_store(store_id)
    return [CategoryOut.from_model(c) for c in categories]


@router.put("/{category_id}", response_model=CategoryOut)
async def update_category(
    category_id: int,
    body: CategoryUpdateRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> CategoryOut:
    category = await CategoryService(session=session).update(
        category_id, principal, name=body.name, description=body.description
    )
    return CategoryOut.from_model(category)


@router.put(
    "/{category_id}/moderate",
    response_model=CategoryOut,
    dependencies=[Depends(require_roles(UserRole.store_admin, UserRole.store_manager))],
)
async def moderate_category(
    category_id: int,
    body: CategoryUpdateRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> CategoryOut:
    # Same edit as update, restricted to operational roles.
    category = await CategoryService(session=session).update(
        category_id, principal, name=body.name, description=body.description
    )
    return CategoryOut.from_model(category)


@router.delete("/{category_id}", response_model=MessageOut)
async def delete_category(
    category_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> MessageOut:
    await CategoryService(session=session).delete(category_id, principal)
    return MessageOut(message="Category deleted successfully")
