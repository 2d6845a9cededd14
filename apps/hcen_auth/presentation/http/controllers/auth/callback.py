"""Callback Controller.

WEB: IdP redirect with ``code``/``state`` query parameters (GET).
MOBILE: app posts ``code``/``state``/``codeVerifier`` (POST).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from apps.hcen_auth.application.oauth.commands import OAuthCallbackInteractor
from apps.hcen_auth.application.oauth.dto import CallbackRequest, LoginResult
from apps.hcen_auth.domain.enums import ClientType
from apps.hcen_auth.presentation.http.auth import rate_limited
from apps.hcen_auth.presentation.http.schemas import (
    LoginResponse,
    MobileCallbackBody,
    UserResponse,
)
from apps.hcen_auth.presentation.http.utils import resolve_client_ip
from apps.hcen_auth.setup.config import Settings, get_settings
from apps.hcen_auth.setup.dependencies import get_oauth_callback_interactor

router = APIRouter()

_callback_limit = Depends(rate_limited("auth/callback"))


def _to_response(result: LoginResult) -> LoginResponse:
    user = result.user
    return LoginResponse(
        session_token=result.session_token,
        expires_in=result.expires_in,
        user=UserResponse(
            ci=user.ci,
            inus_id=user.inus_id,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
        ),
    )


@router.get(
    "/callback",
    response_model=LoginResponse,
    summary="Web callback",
    dependencies=[_callback_limit],
)
async def web_callback(
    request: Request,
    code: Optional[str] = Query(None, description="Authorization code"),
    state: Optional[str] = Query(None, description="State value"),
    error: Optional[str] = Query(None, description="IdP error code"),
    error_description: Optional[str] = Query(None, description="IdP error description"),
    settings: Settings = Depends(get_settings),
    interactor: OAuthCallbackInteractor = Depends(get_oauth_callback_interactor),
) -> LoginResponse:
    """Complete a WEB login from the IdP redirect."""
    if error:
        await interactor.reject(state, error, error_description)

    result = await interactor.execute(
        CallbackRequest(
            code=code or "",
            state=state or "",
            client_type=ClientType.WEB,
            redirect_uri=settings.web_callback_uri,
            client_ip=resolve_client_ip(request),
        )
    )
    return _to_response(result)


@router.post(
    "/callback",
    response_model=LoginResponse,
    summary="Mobile callback",
    dependencies=[_callback_limit],
)
async def mobile_callback(
    body: MobileCallbackBody,
    request: Request,
    interactor: OAuthCallbackInteractor = Depends(get_oauth_callback_interactor),
) -> LoginResponse:
    """Complete a login posted by the app (PKCE verifier in the body)."""
    result = await interactor.execute(
        CallbackRequest(
            code=body.code,
            state=body.state,
            client_type=body.client_type,
            redirect_uri=body.redirect_uri,
            code_verifier=body.code_verifier,
            client_ip=resolve_client_ip(request),
        )
    )
    return _to_response(result)
