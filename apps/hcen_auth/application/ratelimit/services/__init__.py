"""Rate Limit Services."""

from apps.hcen_auth.application.ratelimit.services.rate_limiter import RateLimiter

__all__ = ["RateLimiter"]
