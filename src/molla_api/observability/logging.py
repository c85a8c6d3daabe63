"""
molla_api.observability.logging

Structured logging for the store API.

Responsibilities:
- Configure `structlog` JSON output tagged with service name and environment.
- Mask credentials (passwords, hashes, bearer tokens) before anything is rendered.
- Hand out bound loggers to modules (`log = get_logger(__name__)`).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

MASK = "***"

_SENSITIVE_KEYS = frozenset({"password", "password_hash", "token", "jwt", "authorization"})


def configure_logging(*, service_name: str, env: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )
    # `RequestContextMiddleware` writes the access line; uvicorn's would duplicate it.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            static_fields(service=service_name, env=env),
            redact_credentials,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def static_fields(**fields: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def redact_credentials(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Mask known credential keys, and any string value that looks like a bearer header.
    """

    for key, value in event_dict.items():
        if key in _SENSITIVE_KEYS:
            event_dict[key] = MASK
        elif isinstance(value, str) and value.startswith("Bearer "):
            event_dict[key] = "Bearer " + MASK
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request id, path and caller identity reach every line through contextvars bound in
# `observability.middleware` and `auth.gatekeeper`.
