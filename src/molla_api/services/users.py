from __future__ import annotations

import dataclasses

from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.auth.models import Principal
from molla_api.db.models import User
from molla_api.db.repositories.users import UserRepo
from molla_api.errors import NotFound


class UserService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._users = UserRepo(session)

    async def current_user(self, principal: Principal) -> User:
        # Tokens outlive rows: a deleted user's token still decodes.
        user = await self._users.find_by_email(principal.identity)
        if user is None:
            raise NotFound("User not found")
        return user

    async def with_affiliation(self, principal: Principal) -> Principal:
        """Return `principal` with `store_id` taken from the caller's user record."""

        user = await self.current_user(principal)
        return dataclasses.replace(principal, store_id=user.store_id)

    async def get(self, user_id: int) -> User:
        user = await self._users.get(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    async def list_all(self) -> list[User]:
        return await self._users.list_all()
