"""Security adapters."""

from apps.hcen_auth.infrastructure.security.jwt_session_tokens import JwtSessionTokenService

__all__ = ["JwtSessionTokenService"]
