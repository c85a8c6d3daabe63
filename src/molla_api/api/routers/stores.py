"""
molla_api.api.routers.stores

Store endpoints.

Responsibilities:
- Create a store for the calling store admin (one per admin).
- Read stores (by id, all, own, employer).
- Update/delete behind the per-object authority check; moderation for global admins.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.api.deps import db_session
from molla_api.api.schemas import MessageOut, StoreOut
from molla_api.auth.deps import get_principal, require_roles
from molla_api.auth.models import Principal, UserRole
from molla_api.db.models import StoreStatus
from molla_api.services.stores import StoreContact, StoreService

router = APIRouter(prefix="/api/stores", tags=["stores"])


class ContactIn(BaseModel):
    address: str | None = Field(default=None, max_length=512)
    phone: str | None = Field(default=None, max_length=32)
    email: str | None = Field(default=None, max_length=256)

    def to_contact(self) -> StoreContact:
        return StoreContact(address=self.address, phone=self.phone, email=self.email)


class StoreCreateRequest(BaseModel):
    brand: str = Field(min_length=1, max_length=256)
    description: str | None = None
    store_type: str | None = Field(default=None, max_length=64)
    contact: ContactIn | None = None


class StoreUpdateRequest(BaseModel):
    brand: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = None
    store_type: str | None = Field(default=None, max_length=64)
    contact: ContactIn | None = None


class ModerateRequest(BaseModel):
    status: StoreStatus


@router.post("", response_model=StoreOut)
async def create_store(
    body: StoreCreateRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> StoreOut:
    store = await StoreService(session=session).create(
        principal,
        brand=body.brand,
        description=body.description,
        store_type=body.store_type,
        contact=body.contact.to_contact() if body.contact else None,
    )
    return StoreOut.from_model(store)


@router.get("", response_model=list[StoreOut])
async def list_stores(session: AsyncSession = Depends(db_session)) -> list[StoreOut]:
    return [StoreOut.from_model(s) for s in await StoreService(session=session).list_all()]


@router.get("/admin", response_model=list[StoreOut])
async def get_own_store(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[StoreOut]:
    # Empty list rather than 404 when the admin has not created a store yet.
    store = await StoreService(session=session).for_admin(principal)
    return [StoreOut.from_model(store)] if store is not None else []


@router.get("/employee", response_model=StoreOut)
async def get_employer_store(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> StoreOut:
    return StoreOut.from_model(await StoreService(session=session).for_employee(principal))


@router.get("/{store_id}", response_model=StoreOut)
async def get_store(store_id: int, session: AsyncSession = Depends(db_session)) -> StoreOut:
    return StoreOut.from_model(await StoreService(session=session).get(store_id))


@router.put("/{store_id}", response_model=StoreOut)
async def update_store(
    store_id: int,
    body: StoreUpdateRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> StoreOut:
    changes = body.model_dump(exclude_unset=True, exclude={"contact"})
    store = await StoreService(session=session).update(
        store_id,
        principal,
        changes=changes,
        contact=body.contact.to_contact() if body.contact else None,
    )
    return StoreOut.from_model(store)


@router.delete("/{store_id}", response_model=MessageOut)
async def delete_store(
    store_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> MessageOut:
    await StoreService(session=session).delete(store_id, principal)
    return MessageOut(message="Store deleted successfully")


@router.put(
    "/{store_id}/moderate",
    response_model=StoreOut,
    dependencies=[Depends(require_roles(UserRole.admin))],
)
async def moderate_store(
    store_id: int,
    body: ModerateRequest,
    session: AsyncSession = Depends(db_session),
) -> StoreOut:
    return StoreOut.from_model(await StoreService(session=session).moderate(store_id, body.status))
