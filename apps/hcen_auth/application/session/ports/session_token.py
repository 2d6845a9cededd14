"""SessionTokenService Port.

Binds a session identifier into a signed token handed to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from apps.hcen_auth.domain.entities import Session


@dataclass(frozen=True, slots=True)
class SessionTokenClaims:
    session_id: str
    subject_id: str
    expires_at: int


class SessionTokenService(Protocol):
    def issue(self, session: "Session") -> str: ...

    def decode(self, token: str) -> SessionTokenClaims:
        """
        Raises:
            AuthenticationError: INVALID_TOKEN or TOKEN_EXPIRED
        """
        ...
