"""Auth Router."""

from fastapi import APIRouter

from apps.hcen_auth.presentation.http.controllers.auth.callback import router as callback_router
from apps.hcen_auth.presentation.http.controllers.auth.login import router as login_router
from apps.hcen_auth.presentation.http.controllers.auth.logout import router as logout_router
from apps.hcen_auth.presentation.http.controllers.auth.session import router as session_router
from apps.hcen_auth.presentation.http.schemas import ErrorResponse

router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Invalid state or session token"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        502: {"model": ErrorResponse, "description": "Identity provider failure"},
    }
)

router.include_router(login_router)
router.include_router(callback_router)
router.include_router(session_router)
router.include_router(logout_router)
