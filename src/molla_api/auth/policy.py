"""
molla_api.auth.policy

Route-level authorization policy.

Responsibilities:
- Hold the static path-pattern -> access rule table (first match wins).
- Enforce it as middleware after the gatekeeper has populated the principal.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from molla_api.api.errors import error_response
from molla_api.auth.models import Principal, UserRole
from molla_api.errors import Forbidden, Unauthenticated
from molla_api.observability.logging import get_logger

log = get_logger(__name__)


class Access(enum.StrEnum):
    public = "public"
    authenticated = "authenticated"
    role = "role"


@dataclass(frozen=True, slots=True)
class RouteRule:
    pattern: str
    access: Access
    role: str | None = None

    def matches(self, path: str) -> bool:
        # "/x/**" matches "/x" and everything below it; other patterns match exactly.
        if self.pattern.endswith("/**"):
            base = self.pattern[:-3]
            return path == base or path.startswith(base + "/")
        return path == self.pattern


ROUTE_RULES: tuple[RouteRule, ...] = (
    RouteRule("/auth/**", Access.public),
    RouteRule("/api/super-admin/**", Access.role, UserRole.admin),
    RouteRule("/api/**", Access.authenticated),
)

_DEFAULT_RULE = RouteRule("/**", Access.public)


def match_rule(path: str, rules: tuple[RouteRule, ...] = ROUTE_RULES) -> RouteRule:
    for rule in rules:
        if rule.matches(path):
            return rule
    return _DEFAULT_RULE


def evaluate(rule: RouteRule, principal: Principal | None) -> None:
    """Raise `Unauthenticated` / `Forbidden` when `principal` fails `rule`."""

    if rule.access is Access.public:
        return
    if principal is None:
        raise Unauthenticated()
    if rule.access is Access.role and principal.role != rule.role:
        raise Forbidden("Insufficient role")


class RoutePolicyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        # CORS preflights carry no credentials; CORSMiddleware answers them.
        if request.method == "OPTIONS":
            return await call_next(request)

        rule = match_rule(request.url.path)
        principal = getattr(request.state, "principal", None)
        try:
            evaluate(rule, principal)
        except (Unauthenticated, Forbidden) as e:
            log.info("route_denied", rule=rule.pattern, kind=e.kind)
            return error_response(e)
        return await call_next(request)


# --- Module Notes -----------------------------------------------------------
# Per-object checks (store ownership) are not expressible as path rules; see
# `auth.authority`.
