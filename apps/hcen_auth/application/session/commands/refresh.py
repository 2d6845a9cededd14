"""RefreshSession Command.

Sliding sessions: same identifier, new expiry, new token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apps.hcen_auth.application.session.dto import IssuedSession
from apps.hcen_auth.domain.exceptions import AuthenticationError

if TYPE_CHECKING:
    from apps.hcen_auth.application.session.ports import SessionTokenService
    from apps.hcen_auth.application.session.services import SessionManager


class RefreshSessionInteractor:
    def __init__(
        self,
        token_service: "SessionTokenService",
        session_manager: "SessionManager",
    ) -> None:
        self._token_service = token_service
        self._session_manager = session_manager

    async def execute(self, session_token: str) -> IssuedSession:
        claims = self._token_service.decode(session_token)
        session = await self._session_manager.get(claims.session_id)
        if session.subject_id != claims.subject_id:
            raise AuthenticationError.invalid_token("Session subject mismatch")

        refreshed = await self._session_manager.refresh(claims.session_id)
        return IssuedSession(
            session=refreshed,
            session_token=self._token_service.issue(refreshed),
            expires_in=self._session_manager.ttl_seconds,
        )
