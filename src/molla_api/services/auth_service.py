"""
molla_api.services.auth_service

Signup and login (credential check -> token issuance).

Responsibilities:
- Register new users with a bcrypt-hashed password and issue their first token.
- Authenticate existing users without revealing whether an email is registered.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.auth.jwt import JwtConfig, issue_token
from molla_api.auth.models import UserRole
from molla_api.auth.password import hash_password, verify_password
from molla_api.db.models import User, utcnow
from molla_api.db.repositories.users import UserRepo
from molla_api.errors import AlreadyExists, ForbiddenRole, InvalidCredentials
from molla_api.observability.logging import get_logger
from molla_api.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AuthResult:
    token: str
    user: User
    message: str


@lru_cache(maxsize=4)
def _decoy_hash(rounds: int) -> str:
    # Verified against for unknown emails so both failure paths cost one bcrypt check.
    return hash_password("decoy-password-never-matches", rounds=rounds)


class AuthService:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._jwt = JwtConfig.from_settings(settings)
        self._users = UserRepo(session)

    async def sign_up(
        self,
        *,
        email: str,
        password: str,
        role: UserRole,
        full_name: str,
        phone: str | None = None,
    ) -> AuthResult:
        # Global admins are provisioned out-of-band only.
        if role == UserRole.admin:
            raise ForbiddenRole("Cannot register as ADMIN")
        if await self._users.find_by_email(email) is not None:
            raise AlreadyExists("User already exists")

        now = utcnow()
        user = User(
            email=email,
            password_hash=hash_password(password, rounds=self._settings.password_hash_rounds),
            role=role,
            full_name=full_name,
            phone=phone,
            created_at=now,
            updated_at=now,
            last_login_at=now,
        )
        await self._users.save(user)
        await self._session.commit()

        log.info("signup", user_id=user.id, role=user.role.value)
        token = issue_token(cfg=self._jwt, subject=user.email, role=user.role.value)
        return AuthResult(token=token, user=user, message="User registered successfully")

    async def login(self, *, email: str, password: str) -> AuthResult:
        user = await self._users.find_by_email(email)
        if user is None:
            verify_password(password, _decoy_hash(self._settings.password_hash_rounds))
            log.info("login_failed", reason="unknown_identity")
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            log.info("login_failed", reason="bad_password", user_id=user.id)
            raise InvalidCredentials()

        user.last_login_at = utcnow()
        await self._users.save(user)
        await self._session.commit()

        log.info("login", user_id=user.id)
        token = issue_token(cfg=self._jwt, subject=user.email, role=user.role.value)
        return AuthResult(token=token, user=user, message="Login successfully")


# --- Module Notes -----------------------------------------------------------
# `InvalidCredentials` carries one message for both failure reasons; only the logs
# distinguish them.
