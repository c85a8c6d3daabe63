"""
molla_api.auth.models

Auth domain models.

Responsibilities:
- Define the fixed role set (`UserRole`) and the canonical role-tag format.
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

ROLE_PREFIX = "ROLE_"


def normalize_role_tag(raw: str) -> str:
    """
    Canonical role tag: upper-case with a single `ROLE_` prefix.

    `"admin"` -> `"ROLE_ADMIN"`, `"ROLE_STORE_ADMIN"` is returned unchanged.
    """

    tag = raw.strip().upper()
    return tag if tag.startswith(ROLE_PREFIX) else ROLE_PREFIX + tag


class UserRole(enum.StrEnum):
    # Values are persisted and carried in the token `role` claim.
    admin = "ROLE_ADMIN"
    store_admin = "ROLE_STORE_ADMIN"
    store_manager = "ROLE_STORE_MANAGER"
    employee = "ROLE_EMPLOYEE"
    customer = "ROLE_CUSTOMER"

    @classmethod
    def parse(cls, raw: str) -> UserRole:
        # Accepts "employee", "EMPLOYEE" and "ROLE_EMPLOYEE" alike.
        return cls(normalize_role_tag(raw))


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity for the duration of one request.
    """

    identity: str
    role: str
    # Not in the token; filled from the user record by `UserService.with_affiliation`.
    store_id: int | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    @property
    def is_store_operator(self) -> bool:
        return self.role in (UserRole.store_admin, UserRole.store_manager)


# --- Module Notes -----------------------------------------------------------
# Principals carry exactly one role; the token format tolerates comma-joined roles but
# nothing in this service issues more than one.
