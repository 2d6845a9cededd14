"""HCEN Auth Broker Entry Point.

OAuth 2.0 / OIDC broker in front of gub.uy (Clean Architecture).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.hcen_auth.domain.services import ensure_sha256_available
from apps.hcen_auth.presentation.http.controllers import root_router
from apps.hcen_auth.presentation.http.errors import register_exception_handlers
from apps.hcen_auth.setup.config import get_settings
from apps.hcen_auth.setup.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle."""
    # Startup: PKCE needs SHA-256; fail fast instead of per request
    ensure_sha256_available()
    logger.info("Starting HCEN Auth Broker")

    yield

    # Shutdown
    from apps.hcen_auth.infrastructure.persistence_redis.client import close_all

    await close_all()
    logger.info("Shutting down HCEN Auth Broker")


def create_app() -> FastAPI:
    """FastAPI application factory."""
    settings = get_settings()

    setup_logging("DEBUG" if settings.environment == "local" else settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="OAuth 2.0 / OIDC authentication broker for gub.uy",
        version=settings.service_version,
        lifespan=lifespan,
    )

    cors_origins = (
        settings.cors_origins.split(",")
        if settings.cors_origins
        else ["http://localhost:3000", "http://localhost:5173"]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(root_router)

    @app.get("/health")
    async def root_health():
        return {"status": "healthy", "service": settings.service_name}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "apps.hcen_auth.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
