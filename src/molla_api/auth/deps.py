"""
molla_api.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Expose the gatekeeper's request-scoped `Principal` to handlers.
- Enforce RBAC via reusable dependency factories.
"""

from __future__ import annotations

from fastapi import Depends, Request

from molla_api.auth.models import Principal
from molla_api.errors import Forbidden, Unauthenticated


def optional_principal(request: Request) -> Principal | None:
    # Populated by `auth.gatekeeper.GatekeeperMiddleware`.
    return getattr(request.state, "principal", None)


def get_principal(principal: Principal | None = Depends(optional_principal)) -> Principal:
    if principal is None:
        raise Unauthenticated()
    return principal


def require_roles(*allowed: str):
    allowed_set = frozenset(allowed)

    def _dep(principal: Principal = Depends(get_principal)) -> Principal:
        # Authz: global admin bypasses role checks.
        if principal.is_admin:
            return principal
        if principal.role not in allowed_set:
            raise Forbidden("Insufficient role")
        return principal

    return _dep


# --- Module Notes -----------------------------------------------------------
# Route-wide rules live in `auth.policy`; these dependencies cover handler-specific
# role requirements (e.g. store moderation).
