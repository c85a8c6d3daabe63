"""
molla_api.api.routers.auth

Public signup/login endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from molla_api.api.deps import db_session, settings_dep
from molla_api.api.schemas import UserOut
from molla_api.auth.models import UserRole
from molla_api.auth.password import MAX_PASSWORD_BYTES
from molla_api.services.auth_service import AuthResult, AuthService
from molla_api.settings import Settings

router = APIRouter(prefix="/auth", tags=["auth"])

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _check_password_bytes(value: str) -> str:
    # `max_length` counts characters; bcrypt's limit is in UTF-8 bytes.
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class SignUpRequest(BaseModel):
    email: str = Field(min_length=3, max_length=256, pattern=_EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=MAX_PASSWORD_BYTES)
    full_name: str = Field(min_length=1, max_length=256)
    phone: str | None = Field(default=None, max_length=32)
    role: UserRole = UserRole.customer

    @field_validator("role", mode="before")
    @classmethod
    def _parse_role(cls, value: object) -> object:
        return UserRole.parse(value) if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def _password_bytes(cls, value: str) -> str:
        return _check_password_bytes(value)


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=256)
    password: str = Field(min_length=1, max_length=MAX_PASSWORD_BYTES)

    @field_validator("password")
    @classmethod
    def _password_bytes(cls, value: str) -> str:
        return _check_password_bytes(value)


class AuthResponse(BaseModel):
    jwt: str
    message: str
    user: UserOut

    @classmethod
    def from_result(cls, result: AuthResult) -> AuthResponse:
        return cls(jwt=result.token, message=result.message, user=UserOut.from_model(result.user))


@router.post("/signup", response_model=AuthResponse, status_code=HTTP_201_CREATED)
async def sign_up(
    body: SignUpRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AuthResponse:
    svc = AuthService(session=session, settings=settings)
    result = await svc.sign_up(
        email=body.email,
        password=body.password,
        role=body.role,
        full_name=body.full_name,
        phone=body.phone,
    )
    return AuthResponse.from_result(result)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AuthResponse:
    svc = AuthService(session=session, settings=settings)
    result = await svc.login(email=body.email, password=body.password)
    return AuthResponse.from_result(result)
