"""
molla_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for process entrypoints.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_ORIGINS = ("http://localhost:3000", "http://localhost:5173")


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `MOLLA_`).

    Defaults are safe for local development only; production must override
    `jwt_secret` and `database_url`.
    """

    model_config = SettingsConfigDict(env_prefix="MOLLA_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "molla-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_secret: str = Field(
        default="dev-only-signing-secret-change-me-0123456789", repr=False
    )
    jwt_ttl_hours: int = Field(default=24, ge=1)
    password_hash_rounds: int = Field(default=10, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./molla.db"

    # CORS: comma-separated origins; empty falls back to the localhost defaults.
    allowed_origins: str = ""

    @field_validator("jwt_secret")
    @classmethod
    def _secret_strength(cls, value: str) -> str:
        # HS256 needs at least 256 bits of key material.
        if len(value.encode("utf-8")) < 32:
            raise ValueError("jwt_secret must be at least 32 bytes")
        return value

    @property
    def cors_origins(self) -> list[str]:
        origins = []
        for raw in self.allowed_origins.split(","):
            origin = raw.strip()
            if origin.startswith("="):
                origin = origin[1:].strip()
            if origin:
                origins.append(origin)
        return origins or list(_DEFAULT_ORIGINS)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars on repeated lookups.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Request handlers read settings from `app.state.settings` (see `api.deps`), so tests
# can build an app with explicit Settings without touching the cached instance.
