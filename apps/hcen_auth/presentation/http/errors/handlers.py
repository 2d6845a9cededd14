"""Exception Handlers.

Converts failures into ``{error, message, timestamp}`` responses. Causes
are logged, never serialized.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from apps.hcen_auth.application.common.exceptions import ApplicationError, GatewayError
from apps.hcen_auth.application.ratelimit.exceptions import RateLimitExceededError
from apps.hcen_auth.domain.exceptions import (
    AuthenticationError,
    AuthErrorKind,
    DomainError,
)

logger = logging.getLogger(__name__)


def _error_body(code: str, message: str) -> dict[str, str]:
    return {
        "error": code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def status_for_auth_error(exc: AuthenticationError) -> int:
    """HTTP status per error kind."""
    kind = exc.kind
    if kind is AuthErrorKind.INVALID_STATE:
        return 401
    if kind is AuthErrorKind.INVALID_TOKEN:
        return 401
    if kind is AuthErrorKind.TOKEN_EXPIRED:
        return 401
    if kind is AuthErrorKind.AUTHENTICATION_ERROR:
        return 401
    if kind is AuthErrorKind.OAUTH_ERROR:
        return 400 if exc.is_local_failure else 502
    return 500


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers."""

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        status_code = status_for_auth_error(exc)
        logger.warning(
            "Authentication failure",
            exc_info=exc.cause is not None,
            extra={
                "kind": exc.kind.value,
                "code": exc.code,
                "status": status_code,
                "oauth_error": exc.oauth_error,
                "path": request.url.path,
            },
        )
        return JSONResponse(status_code=status_code, content=_error_body(exc.code, exc.message))

    @app.exception_handler(RateLimitExceededError)
    async def rate_limit_handler(request: Request, exc: RateLimitExceededError):
        return JSONResponse(
            status_code=429,
            content=_error_body("RATE_LIMIT_EXCEEDED", exc.message),
            headers={"Retry-After": str(exc.retry_after_seconds)},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(
            "Request validation failed",
            extra={"path": request.url.path, "errors": len(exc.errors())},
        )
        return JSONResponse(
            status_code=400,
            content=_error_body("INVALID_REQUEST", "Request validation failed"),
        )

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        logger.error("Dependency unavailable", exc_info=exc, extra={"path": request.url.path})
        return JSONResponse(
            status_code=503,
            content=_error_body("SERVICE_UNAVAILABLE", "A required service is unavailable"),
        )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        logger.error("Unhandled domain error", exc_info=exc, extra={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "Internal server error"),
        )

    @app.exception_handler(ApplicationError)
    async def application_error_handler(request: Request, exc: ApplicationError):
        logger.error("Unhandled application error", exc_info=exc, extra={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "Internal server error"),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error("Unexpected error", exc_info=exc, extra={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "Internal server error"),
        )
