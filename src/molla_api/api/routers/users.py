"""
molla_api.api.routers.users

User read endpoints.

Responsibilities:
- Current user's profile.
- Lookup by id; full listing for global admins.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.api.deps import db_session
from molla_api.api.schemas import UserOut
from molla_api.auth.deps import get_principal
from molla_api.auth.models import Principal
from molla_api.services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])
admin_router = APIRouter(prefix="/api/super-admin", tags=["super-admin"])


@router.get("/profile", response_model=UserOut)
async def get_profile(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> UserOut:
    user = await UserService(session=session).current_user(principal)
    return UserOut.from_model(user)


@router.get("/{user_id}", response_model=UserOut)
async def get_user(
    user_id: int,
    session: AsyncSession = Depends(db_session),
) -> UserOut:
    return UserOut.from_model(await UserService(session=session).get(user_id))


@admin_router.get("/users", response_model=list[UserOut])
async def list_users(session: AsyncSession = Depends(db_session)) -> list[UserOut]:
    # Route policy restricts /api/super-admin/** to ROLE_ADMIN.
    users = await UserService(session=session).list_all()
    return [UserOut.from_model(u) for u in users]
