"""GetSession Query.

Resolves a presented session token to the live server-side session.
Downstream resources use this to authenticate calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apps.hcen_auth.domain.exceptions import AuthenticationError

if TYPE_CHECKING:
    from apps.hcen_auth.application.session.ports import SessionTokenService
    from apps.hcen_auth.application.session.services import SessionManager
    from apps.hcen_auth.domain.entities import Session


class GetSessionQueryService:
    def __init__(
        self,
        token_service: "SessionTokenService",
        session_manager: "SessionManager",
    ) -> None:
        self._token_service = token_service
        self._session_manager = session_manager

    async def execute(self, session_token: str) -> "Session":
        """
        Raises:
            AuthenticationError: INVALID_TOKEN for a bad or mismatched token,
                TOKEN_EXPIRED when the token or the session has lapsed
        """
        claims = self._token_service.decode(session_token)
        session = await self._session_manager.get(claims.session_id)
        if session.subject_id != claims.subject_id:
            raise AuthenticationError.invalid_token("Session subject mismatch")
        return session
