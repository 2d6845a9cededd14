"""HTTP auth dependencies."""

from apps.hcen_auth.presentation.http.auth.dependencies import get_bearer_session_token
from apps.hcen_auth.presentation.http.auth.rate_limit import rate_limited

__all__ = ["get_bearer_session_token", "rate_limited"]
