"""
molla_api.db.repositories.users

Repository for `User` entities (the identity store).

Responsibilities:
- Look up credential records by email or id.
- Persist new and updated credential records.
"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.db.models import User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get(self, user_id: int) -> User | None:
        return await self._session.get(User, user_id)

    async def list_all(self) -> list[User]:
        stmt = select(User).order_by(User.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def save(self, user: User) -> User:
        self._session.add(user)
        await self._session.flush()
        return user

    async def detach_from_store(self, store_id: int) -> None:
        # Employees lose their affiliation when the store goes away.
        await self._session.execute(
            update(User).where(User.store_id == store_id).values(store_id=None)
        )
