"""Root Router."""

from fastapi import APIRouter

from apps.hcen_auth.presentation.http.controllers.api_v1_router import (
    router as api_v1_router,
)
from apps.hcen_auth.setup.config.settings import get_settings

router = APIRouter()

# API v1
router.include_router(api_v1_router, prefix=get_settings().api_v1_prefix)
