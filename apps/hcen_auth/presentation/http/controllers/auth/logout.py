"""Logout Controller."""

from fastapi import APIRouter, Depends, Response

from apps.hcen_auth.application.session.commands import LogoutInteractor
from apps.hcen_auth.presentation.http.auth import get_bearer_session_token
from apps.hcen_auth.setup.dependencies import get_logout_interactor

router = APIRouter()


@router.post("/logout", status_code=204, summary="Logout")
async def logout(
    session_token: str = Depends(get_bearer_session_token),
    interactor: LogoutInteractor = Depends(get_logout_interactor),
) -> Response:
    await interactor.execute(session_token)
    return Response(status_code=204)
