"""
molla_api.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) with DB connectivity validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from molla_api.api.deps import db_session, settings_dep
from molla_api.observability.logging import get_logger
from molla_api.settings import Settings

router = APIRouter()
log = get_logger(__name__)


@router.get("/healthz")
async def healthz(settings: Settings = Depends(settings_dep)) -> dict[str, str]:
    return {"status": "ok", "service": settings.service_name}


@router.get("/readyz", response_model=None)
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str] | JSONResponse:
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        log.warning("readiness_failed", error=str(e))
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE, content={"status": "unavailable"}
        )
    return {"status": "ready"}


# --- Module Notes -----------------------------------------------------------
# Both probes are public in `auth.policy`.
