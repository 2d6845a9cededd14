"""Session Ports."""

from apps.hcen_auth.application.session.ports.session_token import (
    SessionTokenClaims,
    SessionTokenService,
)

__all__ = ["SessionTokenClaims", "SessionTokenService"]
