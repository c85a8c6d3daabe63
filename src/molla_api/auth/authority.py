"""
molla_api.auth.authority

Per-object authorization for store-owned resources.

Responsibilities:
- Decide whether a principal may mutate a store, or a category/product owned by one.
"""

from __future__ import annotations

from molla_api.auth.models import Principal
from molla_api.db.models import Store
from molla_api.errors import Forbidden
from molla_api.observability.logging import get_logger

log = get_logger(__name__)


def check_authority(principal: Principal, store: Store | None) -> None:
    """
    Two-tier check:
    - role fast path: global admin, store admin and store manager roles pass for any store
    - ownership fallback: the caller is the store's registered admin

    Raises `Forbidden` otherwise, including when the owning store is unresolved.
    """

    if store is None:
        log.info("authority_denied", identity=principal.identity, reason="store_missing")
        raise Forbidden()

    if principal.is_admin or principal.is_store_operator:
        return

    admin = store.store_admin
    if admin is not None and admin.email == principal.identity:
        return

    log.info("authority_denied", identity=principal.identity, store_id=store.id)
    raise Forbidden()
