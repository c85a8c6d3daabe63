"""
molla_api.services.stores

Store lifecycle service.

Responsibilities:
- Create stores (one per store-admin identity).
- Read stores by id, by admin, by employee affiliation.
- Update / delete / moderate stores behind the shared authority check.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.auth.authority import check_authority
from molla_api.auth.models import Principal
from molla_api.db.models import Store, StoreStatus, utcnow
from molla_api.db.repositories.categories import CategoryRepo
from molla_api.db.repositories.products import ProductRepo
from molla_api.db.repositories.stores import StoreRepo
from molla_api.db.repositories.users import UserRepo
from molla_api.errors import AlreadyExists, NotFound
from molla_api.observability.logging import get_logger
from molla_api.services.users import UserService

log = get_logger(__name__)

_EDITABLE = ("brand", "description", "store_type")


@dataclass(frozen=True, slots=True)
class StoreContact:
    address: str | None = None
    phone: str | None = None
    email: str | None = None


class StoreService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._stores = StoreRepo(session)
        self._users = UserService(session=session)

    async def create(
        self,
        principal: Principal,
        *,
        brand: str,
        description: str | None = None,
        store_type: str | None = None,
        contact: StoreContact | None = None,
    ) -> Store:
        user = await self._users.current_user(principal)
        if await self._stores.find_by_admin_id(user.id) is not None:
            raise AlreadyExists("User already has a store. One user can only have one store.")

        store = Store(
            brand=brand,
            description=description,
            store_type=store_type,
            status=StoreStatus.pending,
            store_admin=user,
        )
        _apply_contact(store, contact)
        await self._stores.save(store)
        await self._session.commit()
        log.info("store_created", store_id=store.id, admin_id=user.id)
        return store

    async def get(self, store_id: int) -> Store:
        store = await self._stores.get(store_id)
        if store is None:
            raise NotFound("Store not found")
        return store

    async def list_all(self) -> list[Store]:
        return await self._stores.list_all()

    async def for_admin(self, principal: Principal) -> Store | None:
        user = await self._users.current_user(principal)
        return await self._stores.find_by_admin_id(user.id)

    async def for_employee(self, principal: Principal) -> Store:
        affiliated = await self._users.with_affiliation(principal)
        store = (
            await self._stores.get(affiliated.store_id) if affiliated.store_id is not None else None
        )
        if store is None:
            raise NotFound("Store not found for this employee")
        return store

    async def update(
        self,
        store_id: int,
        principal: Principal,
        *,
        changes: dict[str, Any],
        contact: StoreContact | None = None,
    ) -> Store:
        store = await self.get(store_id)
        check_authority(principal, store)

        for field in _EDITABLE:
            # An explicit null leaves the stored value untouched (brand is NOT NULL).
            if changes.get(field) is not None:
                setattr(store, field, changes[field])
        _apply_contact(store, contact)
        store.updated_at = utcnow()
        await self._stores.save(store)
        await self._session.commit()
        return store

    async def delete(self, store_id: int, principal: Principal) -> None:
        store = await self.get(store_id)
        check_authority(principal, store)

        # Children first; FKs are enforced.
        await ProductRepo(self._session).delete_for_store(store.id)
        await CategoryRepo(self._session).delete_for_store(store.id)
        await UserRepo(self._session).detach_from_store(store.id)
        await self._stores.delete(store)
        await self._session.commit()
        log.info("store_deleted", store_id=store_id)

    async def moderate(self, store_id: int, status: StoreStatus) -> Store:
        store = await self.get(store_id)
        store.status = status
        store.updated_at = utcnow()
        await self._stores.save(store)
        await self._session.commit()
        log.info("store_moderated", store_id=store_id, status=status.value)
        return store


def _apply_contact(store: Store, contact: StoreContact | None) -> None:
    if contact is None:
        return
    store.contact_address = contact.address
    store.contact_phone = contact.phone
    store.contact_email = contact.email
