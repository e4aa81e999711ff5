"""FastAPI application serving the member preference endpoints."""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from redfin_api.core.config import Settings, get_settings
from redfin_api.core.logging_setup import setup_logging
from redfin_api.domain.preferences import PREFERENCE_KINDS
from redfin_api.routers import preferences as preferences_router
from redfin_api.services.preference_service import PreferenceService

logger = logging.getLogger(__name__)

DEV_ORIGINS = {
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every JSON response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _allowed_origins(settings: Settings) -> list[str]:
    allowed = set(settings.cors_origins)
    if settings.app_env != "prod":
        allowed.update(DEV_ORIGINS)
    return sorted(origin for origin in allowed if origin)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Redfin Member Preferences API")

    origins = _allowed_origins(settings)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    app.state.preference_services = {kind.name: PreferenceService(kind) for kind in PREFERENCE_KINDS}
    for kind in PREFERENCE_KINDS:
        app.include_router(preferences_router.build_router(kind, prefix=settings.api_prefix))

    @app.get("/health")
    def health():
        return {"ok": True}

    logger.info(
        "Preference routes mounted under %r for %s",
        settings.api_prefix,
        ", ".join(kind.path for kind in PREFERENCE_KINDS),
    )
    return app


app = create_app()
