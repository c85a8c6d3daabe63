"""
molla_api.db.models

Core persistence schema.

Responsibilities:
- Define ORM models for the store catalogue:
  - User: credential record (email + bcrypt hash) and role
  - Store: tenant, owned by exactly one store-admin user
  - Category / Product: store-owned catalogue entries
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime

from sqlalchemy import Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from molla_api.auth.models import UserRole
from molla_api.db.base import Base


def utcnow() -> datetime:
    # Persist naive UTC timestamps; SQLite has no tz-aware type.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class StoreStatus(enum.StrEnum):
    pending = "PENDING"
    active = "ACTIVE"
    blocked = "BLOCKED"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True, index=True)
    # bcrypt hash, never the plaintext.
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    full_name: Mapped[str] = mapped_column(String(256), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False)

    # Employee affiliation; circular with stores.store_admin_id, hence use_alter.
    store_id: Mapped[int | None] = mapped_column(
        ForeignKey("stores.id", use_alter=True, name="fk_users_store_id"),
        nullable=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)
    last_login_at: Mapped[datetime | None] = mapped_column(nullable=True)


class Store(Base):
    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    store_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[StoreStatus] = mapped_column(
        Enum(StoreStatus), nullable=False, default=StoreStatus.pending
    )

    contact_address: Mapped[str | None] = mapped_column(String(512), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(256), nullable=True)

    store_admin_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)

    # Eager: the authority check always needs the admin's identity.
    store_admin: Mapped[User] = relationship(foreign_keys=[store_admin_id], lazy="joined")


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id"), nullable=False, index=True)

    store: Mapped[Store] = relationship(lazy="joined")


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sku: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    mrp: Mapped[float | None] = mapped_column(Float, nullable=True)
    selling_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    brand: Mapped[str | None] = mapped_column(String(256), nullable=True)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id"), nullable=False, index=True)
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("categories.id"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)

    store: Mapped[Store] = relationship(lazy="joined")
    category: Mapped[Category | None] = relationship(lazy="joined")


# --- Module Notes -----------------------------------------------------------
# Relationships are eager ("joined") so async sessions never hit implicit lazy loads.
