"""JWT Session Token Service.

SessionTokenService port implementation. The token's ``jti`` is the
server-side session identifier.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from jose import ExpiredSignatureError, JWTError, jwt

from apps.hcen_auth.application.session.ports import SessionTokenClaims
from apps.hcen_auth.domain.exceptions import AuthenticationError

if TYPE_CHECKING:
    from apps.hcen_auth.domain.entities import Session

TOKEN_TYPE = "session"


class JwtSessionTokenService:
    """Signs and verifies session tokens."""

    def __init__(
        self,
        *,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "hcen-auth",
        audience: str = "hcen-api",
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._issuer = issuer
        self._audience = audience

    def _now_timestamp(self) -> int:
        return int(time.time())

    def issue(self, session: "Session") -> str:
        """Token expires together with the session record."""
        now = self._now_timestamp()
        payload: dict[str, Any] = {
            "sub": session.subject_id,
            "jti": session.session_id,
            "type": TOKEN_TYPE,
            "client_type": session.client_type.value,
            "exp": int(session.expires_at.timestamp()),
            "iat": now,
            "nbf": now,
            "iss": self._issuer,
            "aud": self._audience,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> SessionTokenClaims:
        if not token:
            raise AuthenticationError.invalid_token("Missing session token")
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
            )
        except ExpiredSignatureError as e:
            raise AuthenticationError.token_expired("Session token has expired") from e
        except JWTError as e:
            raise AuthenticationError.invalid_token("Invalid session token") from e

        if payload.get("type") != TOKEN_TYPE or not payload.get("jti") or not payload.get("sub"):
            raise AuthenticationError.invalid_token("Not a session token")

        return SessionTokenClaims(
            session_id=payload["jti"],
            subject_id=payload["sub"],
            expires_at=int(payload["exp"]),
        )
