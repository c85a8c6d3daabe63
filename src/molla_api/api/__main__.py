"""
molla_api.api.__main__

Entrypoint for running the FastAPI application via `python -m molla_api.api` or `molla-api`.

Responsibilities:
- Load settings and refuse to serve prod with the built-in dev secret.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from molla_api.api.app import create_app
from molla_api.settings import Settings, get_settings


def main() -> None:
    settings = get_settings()
    if settings.env == "prod" and settings.jwt_secret == Settings.model_fields["jwt_secret"].default:
        raise SystemExit("MOLLA_JWT_SECRET must be set in prod")

    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
