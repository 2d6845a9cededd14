"""Session Controller."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from apps.hcen_auth.application.session.commands import RefreshSessionInteractor
from apps.hcen_auth.application.session.queries import GetSessionQueryService
from apps.hcen_auth.presentation.http.auth import get_bearer_session_token, rate_limited
from apps.hcen_auth.presentation.http.schemas import LoginResponse, SessionResponse
from apps.hcen_auth.setup.dependencies import (
    get_get_session_query,
    get_refresh_session_interactor,
)

router = APIRouter()


@router.get("/session", response_model=SessionResponse, summary="Current session")
async def get_session(
    session_token: str = Depends(get_bearer_session_token),
    query: GetSessionQueryService = Depends(get_get_session_query),
) -> SessionResponse:
    session = await query.execute(session_token)
    return SessionResponse(
        subject_id=session.subject_id,
        client_type=session.client_type,
        issued_at=session.issued_at,
        expires_at=session.expires_at,
        expires_in=session.remaining_seconds(datetime.now(timezone.utc)),
        attributes=session.attributes,
    )


@router.post(
    "/session/refresh",
    response_model=LoginResponse,
    summary="Extend the current session",
    dependencies=[Depends(rate_limited("auth/session/refresh"))],
)
async def refresh_session(
    session_token: str = Depends(get_bearer_session_token),
    interactor: RefreshSessionInteractor = Depends(get_refresh_session_interactor),
) -> LoginResponse:
    """Same session identifier, new expiry and token."""
    issued = await interactor.execute(session_token)
    return LoginResponse(session_token=issued.session_token, expires_in=issued.expires_in)
