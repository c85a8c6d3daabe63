"""
molla_api.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue signed, 24h tokens carrying subject + role claim.
- Decode and validate tokens, classifying failures (signature / expiry / shape).

Note:
- Issuance and validation happen in the same process, so HS256 with a shared secret
  is sufficient.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import ExpiredSignatureError, InvalidSignatureError, InvalidTokenError

from molla_api.settings import Settings

BEARER_PREFIX = "Bearer "
DEFAULT_TTL = timedelta(hours=24)


@dataclass(frozen=True, slots=True)
class JwtConfig:
    secret: str
    alg: str = "HS256"
    ttl: timedelta = DEFAULT_TTL

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            secret=settings.jwt_secret,
            alg=settings.jwt_alg,
            ttl=timedelta(hours=settings.jwt_ttl_hours),
        )


@dataclass(frozen=True, slots=True)
class TokenClaims:
    subject: str
    role: str


class TokenError(Exception):
    kind = "TokenError"


class InvalidSignature(TokenError):
    kind = "InvalidSignature"


class TokenExpired(TokenError):
    kind = "Expired"


class MalformedToken(TokenError):
    kind = "Malformed"


def strip_bearer(token: str) -> str:
    if token.startswith(BEARER_PREFIX):
        return token[len(BEARER_PREFIX) :]
    return token


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str,
    role: str,
    now: datetime | None = None,
) -> str:
    if not subject:
        raise ValueError("token subject must be non-empty")
    issued = now or datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "sub": subject,
        "role": role,
        "iat": int(issued.timestamp()),
        "exp": int((issued + cfg.ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_token(*, cfg: JwtConfig, token: str) -> TokenClaims:
    try:
        payload = jwt.decode(
            strip_bearer(token),
            cfg.secret,
            algorithms=[cfg.alg],
            options={"require": ["exp", "iat", "sub"]},
        )
    # InvalidSignatureError subclasses DecodeError, so it must be matched first.
    except InvalidSignatureError as e:
        raise InvalidSignature(str(e)) from e
    except ExpiredSignatureError as e:
        raise TokenExpired(str(e)) from e
    except InvalidTokenError as e:
        raise MalformedToken(str(e)) from e

    subject = payload.get("sub")
    role = payload.get("role")
    if not isinstance(subject, str) or not subject:
        raise MalformedToken("token subject missing")
    if not isinstance(role, str) or not role:
        raise MalformedToken("token role claim missing")
    return TokenClaims(subject=subject, role=role)


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `services.auth_service`; decoding by `auth.gatekeeper`.
