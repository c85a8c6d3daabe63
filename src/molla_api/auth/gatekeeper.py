"""
molla_api.auth.gatekeeper

Request gatekeeper: bearer token -> request-scoped principal.

Responsibilities:
- Resolve the `Authorization` header into an explicit `GateOutcome`.
- Attach the resulting `Principal` (or `None`) to `request.state.principal`.

Contract:
- The gatekeeper never rejects a request. A missing, expired, forged or malformed
  token leaves the request anonymous; route policy and handler dependencies decide
  whether anonymous access is acceptable.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from molla_api.auth.jwt import (
    BEARER_PREFIX,
    InvalidSignature,
    JwtConfig,
    MalformedToken,
    TokenExpired,
    decode_token,
)
from molla_api.auth.models import Principal, normalize_role_tag
from molla_api.observability.logging import get_logger

log = get_logger(__name__)


class GateStatus(enum.StrEnum):
    authenticated = "authenticated"
    anonymous = "anonymous"
    invalid_signature = "invalid_signature"
    expired = "expired"
    malformed = "malformed"


@dataclass(frozen=True, slots=True)
class GateOutcome:
    status: GateStatus
    principal: Principal | None = None
    detail: str | None = None


def resolve_principal(cfg: JwtConfig, authorization: str | None) -> GateOutcome:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return GateOutcome(GateStatus.anonymous)

    try:
        claims = decode_token(cfg=cfg, token=authorization)
    except InvalidSignature as e:
        return GateOutcome(GateStatus.invalid_signature, detail=str(e))
    except TokenExpired as e:
        return GateOutcome(GateStatus.expired, detail=str(e))
    except MalformedToken as e:
        return GateOutcome(GateStatus.malformed, detail=str(e))

    principal = Principal(identity=claims.subject, role=normalize_role_tag(claims.role))
    return GateOutcome(GateStatus.authenticated, principal=principal)


class GatekeeperMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, *, jwt_config: JwtConfig) -> None:
        super().__init__(app)
        self._cfg = jwt_config

    async def dispatch(self, request: Request, call_next) -> Response:
        outcome = resolve_principal(self._cfg, request.headers.get("authorization"))
        if outcome.status not in (GateStatus.authenticated, GateStatus.anonymous):
            log.info("token_rejected", kind=outcome.status.value, detail=outcome.detail)
        elif outcome.principal is not None:
            structlog.contextvars.bind_contextvars(identity=outcome.principal.identity)
        request.state.principal = outcome.principal
        return await call_next(request)


# --- Module Notes -----------------------------------------------------------
# Role tags are normalized here once; everything downstream compares canonical
# `ROLE_*` strings.
