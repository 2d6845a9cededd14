"""OAuth Ports."""

from apps.hcen_auth.application.oauth.ports.identity_provider import (
    IdentityProviderGateway,
    ProviderTokens,
)

__all__ = ["IdentityProviderGateway", "ProviderTokens"]
