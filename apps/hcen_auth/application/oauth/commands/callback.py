"""OAuthCallback Command.

Completes a login: code exchange, user resolution and session creation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NoReturn

from apps.hcen_auth.application.oauth.dto import CallbackRequest, LoginResult, UserInfo

if TYPE_CHECKING:
    from apps.hcen_auth.application.cache.services import ProfileCacheInvalidator
    from apps.hcen_auth.application.oauth.dto import ExchangeResult
    from apps.hcen_auth.application.oauth.ports import IdentityProviderGateway
    from apps.hcen_auth.application.oauth.services import TokenExchangeService
    from apps.hcen_auth.application.session.ports import SessionTokenService
    from apps.hcen_auth.application.session.services import SessionManager
    from apps.hcen_auth.application.users.ports import UserDirectory, UserIdentity

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "PATIENT"
FIRST_NAME_CLAIM = "primer_nombre"
LAST_NAME_CLAIM = "primer_apellido"


class OAuthCallbackInteractor:
    """OAuth callback Interactor.

    Workflow:
        1. Exchange the code (TokenExchangeService)
        2. Resolve the user (UserDirectory, IdP claims, userinfo fallback)
        3. Drop the cached profile for the subject
        4. Create the session and issue the session token

    Dependencies:
        Services:
            - exchange_service: state, PKCE and code exchange
            - session_manager: Session pool
            - profile_cache: Cache pool invalidation
        Ports:
            - identity_provider: userinfo fallback
            - user_directory: national user index lookup
            - token_service: session token signing
    """

    def __init__(
        self,
        exchange_service: "TokenExchangeService",
        session_manager: "SessionManager",
        profile_cache: "ProfileCacheInvalidator",
        identity_provider: "IdentityProviderGateway",
        user_directory: "UserDirectory",
        token_service: "SessionTokenService",
    ) -> None:
        self._exchange_service = exchange_service
        self._session_manager = session_manager
        self._profile_cache = profile_cache
        self._identity_provider = identity_provider
        self._user_directory = user_directory
        self._token_service = token_service

    async def execute(self, request: CallbackRequest) -> LoginResult:
        """Handle the callback.

        Raises:
            AuthenticationError: any exchange failure (terminal)
            UserDirectoryUnavailableError: user lookup failed
            StoreUnavailableError: session or cache store failed
        """
        result = await self._exchange_service.exchange(request)

        identity = await self._user_directory.find_by_ci(result.subject_id)
        user = await self._resolve_user(result, identity)

        await self._profile_cache.invalidate_user_profile(user.ci)

        session = await self._session_manager.create(
            user.ci,
            request.client_type,
            user.as_attributes(),
        )
        session_token = self._token_service.issue(session)

        logger.info(
            "Login completed",
            extra={
                "subject_id": user.ci,
                "client_type": request.client_type.value,
                "registered": identity is not None,
            },
        )
        return LoginResult(
            session=session,
            session_token=session_token,
            expires_in=self._session_manager.ttl_seconds,
            user=user,
        )

    async def reject(
        self,
        state: str | None,
        error: str,
        error_description: str | None = None,
    ) -> NoReturn:
        """IdP redirected back with an error instead of a code."""
        await self._exchange_service.reject(state, error, error_description)

    async def _resolve_user(
        self,
        result: "ExchangeResult",
        identity: "UserIdentity | None",
    ) -> UserInfo:
        claims: dict[str, Any] = dict(result.claims)
        first_name = claims.get(FIRST_NAME_CLAIM) or (identity.first_name if identity else None)
        last_name = claims.get(LAST_NAME_CLAIM) or (identity.last_name if identity else None)

        if not first_name and result.tokens.access_token:
            claims.update(await self._identity_provider.fetch_user_info(result.tokens.access_token))
            first_name = claims.get(FIRST_NAME_CLAIM)
            last_name = last_name or claims.get(LAST_NAME_CLAIM)

        return UserInfo(
            ci=result.subject_id,
            inus_id=identity.inus_id if identity else None,
            first_name=first_name,
            last_name=last_name,
            role=(identity.role if identity and identity.role else DEFAULT_ROLE),
        )
