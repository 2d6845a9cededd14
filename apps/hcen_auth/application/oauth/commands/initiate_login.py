"""InitiateLogin Command.

Builds the IdP authorization redirect for a new login attempt.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from apps.hcen_auth.application.oauth.dto import InitiateLoginRequest, InitiateLoginResponse
from apps.hcen_auth.domain.exceptions import AuthenticationError, OAuthFailureSource

if TYPE_CHECKING:
    from apps.hcen_auth.application.oauth.ports import IdentityProviderGateway
    from apps.hcen_auth.application.oauth.services import OAuthStateTracker

# base64url(SHA-256) without padding
_CHALLENGE_PATTERN = re.compile(r"[A-Za-z0-9_-]{43}")


class InitiateLoginInteractor:
    """Authorization redirect Interactor.

    Workflow:
        1. Validate the PKCE challenge (required for MOBILE, ignored for WEB)
        2. Issue state + nonce
        3. Build the authorization URL
    """

    def __init__(
        self,
        state_tracker: "OAuthStateTracker",
        identity_provider: "IdentityProviderGateway",
    ) -> None:
        self._state_tracker = state_tracker
        self._identity_provider = identity_provider

    async def execute(self, request: InitiateLoginRequest) -> InitiateLoginResponse:
        code_challenge = None
        if request.client_type.requires_pkce:
            if not request.code_challenge:
                raise AuthenticationError.oauth(
                    "code_challenge is required for mobile clients",
                    code="PKCE_CHALLENGE_REQUIRED",
                    oauth_error="invalid_request",
                    source=OAuthFailureSource.LOCAL,
                )
            if _CHALLENGE_PATTERN.fullmatch(request.code_challenge) is None:
                raise AuthenticationError.oauth(
                    "code_challenge must be an S256 challenge",
                    code="PKCE_CHALLENGE_INVALID",
                    oauth_error="invalid_request",
                    source=OAuthFailureSource.LOCAL,
                )
            code_challenge = request.code_challenge

        state = await self._state_tracker.issue(
            request.client_type,
            request.redirect_uri,
            code_challenge,
            client_ip=request.client_ip,
        )
        authorization_url = self._identity_provider.build_authorization_url(
            client_type=request.client_type,
            redirect_uri=request.redirect_uri,
            state=state.state_token,
            nonce=state.nonce,
            code_challenge=code_challenge,
        )
        return InitiateLoginResponse(
            authorization_url=authorization_url,
            state=state.state_token,
            expires_in=self._state_tracker.ttl_seconds,
        )
