"""gub.uy OIDC adapters."""

from apps.hcen_auth.infrastructure.oauth.gubuy_client import GubUyOidcClient
from apps.hcen_auth.infrastructure.oauth.id_token_validator import JwksIdTokenValidator

__all__ = ["GubUyOidcClient", "JwksIdTokenValidator"]
