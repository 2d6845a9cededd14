"""Login Controller.

Authorization redirect initiation.
"""

from fastapi import APIRouter, Depends, Request

from apps.hcen_auth.application.oauth.commands import InitiateLoginInteractor
from apps.hcen_auth.application.oauth.dto import InitiateLoginRequest
from apps.hcen_auth.presentation.http.auth import rate_limited
from apps.hcen_auth.presentation.http.schemas import InitiateLoginBody, InitiateLoginResponse
from apps.hcen_auth.presentation.http.utils import resolve_client_ip
from apps.hcen_auth.setup.dependencies import get_initiate_login_interactor

router = APIRouter()


@router.post(
    "/login/initiate",
    response_model=InitiateLoginResponse,
    summary="Start a gub.uy login",
    dependencies=[Depends(rate_limited("auth/login/initiate"))],
)
async def initiate_login(
    body: InitiateLoginBody,
    request: Request,
    interactor: InitiateLoginInteractor = Depends(get_initiate_login_interactor),
) -> InitiateLoginResponse:
    """Return the IdP authorization URL.

    MOBILE clients must send ``codeChallenge`` (S256); the verifier stays
    on the device until the callback.
    """
    result = await interactor.execute(
        InitiateLoginRequest(
            client_type=body.client_type,
            redirect_uri=body.redirect_uri,
            code_challenge=body.code_challenge,
            client_ip=resolve_client_ip(request),
        )
    )
    return InitiateLoginResponse(
        authorization_url=result.authorization_url,
        state=result.state,
        expires_in=result.expires_in,
    )
