"""Domain Entities."""

from apps.hcen_auth.domain.entities.authorization_state import AuthorizationState
from apps.hcen_auth.domain.entities.rate_limit_counter import RateLimitCounter
from apps.hcen_auth.domain.entities.session import Session

__all__ = ["AuthorizationState", "Session", "RateLimitCounter"]
