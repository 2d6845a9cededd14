"""AuthorizationState Entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from apps.hcen_auth.domain.enums import ClientType


@dataclass(frozen=True, slots=True)
class AuthorizationState:
    """Pending authorization attempt, keyed by ``state_token``.

    Exists at most once in the State pool and is consumed exactly once.
    """

    state_token: str
    nonce: str
    client_type: ClientType
    redirect_uri: str
    created_at: datetime
    code_challenge: str | None = None

    def to_record(self) -> dict[str, Any]:
        """Stored JSON shape (camelCase, shared with existing deployments)."""
        return {
            "nonce": self.nonce,
            "clientType": self.client_type.value,
            "redirectUri": self.redirect_uri,
            "codeChallenge": self.code_challenge,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, state_token: str, record: dict[str, Any]) -> AuthorizationState:
        """Rebuild from a stored record.

        Raises:
            KeyError: a required field is missing
            ValueError: a field has an unexpected value
        """
        return cls(
            state_token=state_token,
            nonce=record["nonce"],
            client_type=ClientType(record["clientType"]),
            redirect_uri=record["redirectUri"],
            created_at=datetime.fromisoformat(record["createdAt"]),
            code_challenge=record.get("codeChallenge"),
        )
