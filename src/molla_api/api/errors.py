"""
molla_api.api.errors

HTTP rendering of errors.

Responsibilities:
- Render `AppError`s as `{"success": false, "message", "error"}` payloads.
- Map validation errors to 422 and anything unexpected to a generic 500.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from molla_api.errors import AppError
from molla_api.observability.logging import get_logger

log = get_logger(__name__)


def _payload(message: str, kind: str) -> dict[str, object]:
    return {"success": False, "message": message, "error": kind}


def error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_payload(exc.message, exc.kind))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(_: Request, exc: AppError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{loc}: {first.get('msg', 'invalid value')}" if loc else "Invalid request"
        return JSONResponse(
            status_code=422,
            content=_payload(message, "ValidationError"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_payload(str(exc.detail), "HTTPException"),
        )

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        log.error("unhandled_error", path=request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=_payload("An unexpected error occurred", "InternalError"),
        )


# --- Module Notes -----------------------------------------------------------
# `auth.policy` reuses `error_response` so middleware rejections share the payload shape.
