"""Logout Command."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from apps.hcen_auth.application.session.ports import SessionTokenService
    from apps.hcen_auth.application.session.services import SessionManager


class LogoutInteractor:
    """Invalidates the session bound to a session token."""

    def __init__(
        self,
        token_service: "SessionTokenService",
        session_manager: "SessionManager",
    ) -> None:
        self._token_service = token_service
        self._session_manager = session_manager

    async def execute(self, session_token: str) -> bool:
        """
        Raises:
            AuthenticationError: INVALID_TOKEN / TOKEN_EXPIRED for a bad token
        """
        claims = self._token_service.decode(session_token)
        return await self._session_manager.invalidate(claims.session_id)
