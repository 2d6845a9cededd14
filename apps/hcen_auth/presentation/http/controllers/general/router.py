"""General Router.

Health check.
"""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health", summary="Health check")
async def health() -> dict[str, str]:
    return {"status": "healthy", "service": "hcen-auth"}
