from __future__ import annotations

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wayfinder.shared.config.settings import settings, init_logging
from wayfinder.shared.errors import PlannerError

from wayfinder.shared.api.health import router as health_router
from wayfinder.features.planner.api.routes import router as planner_router, planner_error_handler

log = logging.getLogger("app")


def _split(value: str) -> list:
    return [v.strip() for v in (value or "").split(",") if v.strip()] if value and value != "*" else ["*"]


def create_app() -> FastAPI:
    init_logging()
    app = FastAPI(title="Wayfinder", version="1.0.0")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_split(settings.CORS_ALLOW_ORIGINS),
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=_split(settings.CORS_ALLOW_METHODS),
        allow_headers=_split(settings.CORS_ALLOW_HEADERS),
    )

    # Routers
    app.include_router(health_router)
    app.include_router(planner_router, prefix="/v1")
    app.add_exception_handler(PlannerError, planner_error_handler)

    if not settings.GOOGLE_PLACES_API_KEY:
        log.warning("GOOGLE_PLACES_API_KEY is not set; place search is disabled and images use placeholders")
    if not settings.OPENAI_API_KEY:
        log.warning("OPENAI_API_KEY is not set; every planner request will fail")

    return app

# Uvicorn/Gunicorn entry point
app = create_app()
