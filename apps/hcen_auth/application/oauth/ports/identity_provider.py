"""IdentityProviderGateway Port.

External OIDC identity provider (gub.uy).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from apps.hcen_auth.domain.enums import ClientType


@dataclass(frozen=True, slots=True)
class ProviderTokens:
    """Token endpoint response."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    id_token: str | None = None
    refresh_token: str | None = None
    scope: str | None = None


class IdentityProviderGateway(Protocol):
    """IdP operations used by the broker.

    Every failure is raised as ``AuthenticationError`` of kind OAUTH_ERROR
    (or INVALID_TOKEN for a rejected ID token).
    """

    def build_authorization_url(
        self,
        *,
        client_type: "ClientType",
        redirect_uri: str,
        state: str,
        nonce: str,
        code_challenge: str | None = None,
    ) -> str: ...

    async def exchange_code(
        self,
        *,
        client_type: "ClientType",
        code: str,
        redirect_uri: str,
        code_verifier: str | None = None,
    ) -> ProviderTokens:
        """Single attempt, bounded by a timeout. Never retried."""
        ...

    async def validate_id_token(
        self,
        id_token: str,
        *,
        nonce: str,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """Verify signature, issuer, audience, expiry, nonce (and at_hash). Returns claims."""
        ...

    async def fetch_user_info(self, access_token: str) -> dict[str, Any]: ...
