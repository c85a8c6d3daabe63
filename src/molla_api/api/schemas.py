"""
molla_api.api.schemas

Response models shared across routers.

Responsibilities:
- Map ORM rows to public views (never exposing password hashes).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from molla_api.db.models import Category, Product, Store, User


class UserOut(BaseModel):
    id: int
    email: str
    full_name: str
    phone: str | None
    role: str
    store_id: int | None
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None

    @classmethod
    def from_model(cls, user: User) -> UserOut:
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            phone=user.phone,
            role=user.role.value,
            store_id=user.store_id,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login_at=user.last_login_at,
        )


class ContactOut(BaseModel):
    address: str | None = None
    phone: str | None = None
    email: str | None = None


class StoreOut(BaseModel):
    id: int
    brand: str
    description: str | None
    store_type: str | None
    status: str
    contact: ContactOut
    store_admin: UserOut
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, store: Store) -> StoreOut:
        return cls(
            id=store.id,
            brand=store.brand,
            description=store.description,
            store_type=store.store_type,
            status=store.status.value,
            contact=ContactOut(
                address=store.contact_address,
                phone=store.contact_phone,
                email=store.contact_email,
            ),
            store_admin=UserOut.from_model(store.store_admin),
            created_at=store.created_at,
            updated_at=store.updated_at,
        )


class CategoryOut(BaseModel):
    id: int
    name: str
    description: str | None
    store_id: int

    @classmethod
    def from_model(cls, category: Category) -> CategoryOut:
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            store_id=category.store_id,
        )


class ProductOut(BaseModel):
    id: int
    name: str
    description: str | None
    sku: str
    mrp: float | None
    selling_price: float | None
    brand: str | None
    image: str | None
    store_id: int
    category: CategoryOut | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, product: Product) -> ProductOut:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            sku=product.sku,
            mrp=product.mrp,
            selling_price=product.selling_price,
            brand=product.brand,
            image=product.image,
            store_id=product.store_id,
            category=CategoryOut.from_model(product.category) if product.category else None,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class MessageOut(BaseModel):
    success: bool = True
    message: str
