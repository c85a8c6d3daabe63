"""
tests.test_auth_service

Signup/login behavior against a real (SQLite) identity store.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from molla_api.auth.jwt import JwtConfig, decode_token
from molla_api.auth.models import UserRole
from molla_api.auth.password import verify_password
from molla_api.db.repositories.users import UserRepo
from molla_api.errors import AlreadyExists, ForbiddenRole, InvalidCredentials
from molla_api.services.auth_service import AuthService
from molla_api.settings import Settings


def _svc(session: AsyncSession, settings: Settings) -> AuthService:
    return AuthService(session=session, settings=settings)


@pytest.mark.asyncio
async def test_signup_then_login_round_trip(
    session: AsyncSession, settings: Settings, jwt_cfg: JwtConfig
) -> None:
    svc = _svc(session, settings)

    signed_up = await svc.sign_up(
        email="a@x.com", password="Secret1!", role=UserRole.employee, full_name="A"
    )
    claims = decode_token(cfg=jwt_cfg, token=signed_up.token)
    assert claims.subject == "a@x.com"
    assert claims.role == UserRole.employee
    assert signed_up.user.id is not None
    assert signed_up.user.password_hash != "Secret1!"
    assert signed_up.user.created_at == signed_up.user.last_login_at

    logged_in = await svc.login(email="a@x.com", password="Secret1!")
    assert decode_token(cfg=jwt_cfg, token=logged_in.token).subject == "a@x.com"
    assert logged_in.user.last_login_at >= signed_up.user.created_at

    with pytest.raises(InvalidCredentials):
        await svc.login(email="a@x.com", password="wrong")


@pytest.mark.asyncio
async def test_duplicate_signup_leaves_record_untouched(
    session: AsyncSession, settings: Settings
) -> None:
    svc = _svc(session, settings)
    first = await svc.sign_up(
        email="dup@x.com", password="Secret1!", role=UserRole.customer, full_name="First"
    )
    original_hash = first.user.password_hash

    with pytest.raises(AlreadyExists):
        await svc.sign_up(
            email="dup@x.com", password="Other2@", role=UserRole.store_admin, full_name="Second"
        )

    stored = await UserRepo(session).find_by_email("dup@x.com")
    assert stored is not None
    assert stored.password_hash == original_hash
    assert stored.full_name == "First"
    assert stored.role == UserRole.customer
    assert verify_password("Secret1!", stored.password_hash)


@pytest.mark.asyncio
async def test_admin_self_registration_is_forbidden(
    session: AsyncSession, settings: Settings
) -> None:
    svc = _svc(session, settings)
    with pytest.raises(ForbiddenRole):
        await svc.sign_up(
            email="root@x.com", password="Secret1!", role=UserRole.admin, full_name="Root"
        )
    assert await UserRepo(session).find_by_email("root@x.com") is None

    # Still ForbiddenRole when the email already exists.
    await svc.sign_up(email="taken@x.com", password="Secret1!", role=UserRole.customer, full_name="T")
    with pytest.raises(ForbiddenRole):
        await svc.sign_up(
            email="taken@x.com", password="Secret1!", role=UserRole.admin, full_name="T"
        )


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(
    session: AsyncSession, settings: Settings
) -> None:
    svc = _svc(session, settings)
    await svc.sign_up(email="a@x.com", password="Secret1!", role=UserRole.customer, full_name="A")

    with pytest.raises(InvalidCredentials) as wrong_password:
        await svc.login(email="a@x.com", password="nope")
    with pytest.raises(InvalidCredentials) as unknown_identity:
        await svc.login(email="ghost@x.com", password="Secret1!")

    assert type(wrong_password.value) is type(unknown_identity.value)
    assert str(wrong_password.value) == str(unknown_identity.value) == "Invalid email or password"
    assert wrong_password.value.kind == unknown_identity.value.kind
