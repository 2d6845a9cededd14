"""Rate limit dependency."""

from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import Depends, Request

from apps.hcen_auth.application.ratelimit.exceptions import RateLimitExceededError
from apps.hcen_auth.application.ratelimit.services import RateLimiter
from apps.hcen_auth.presentation.http.utils import resolve_client_ip
from apps.hcen_auth.setup.dependencies import get_rate_limiter


def rate_limited(endpoint: str) -> Callable[..., Awaitable[None]]:
    """Dependency admitting at most the configured requests per window.

    Usage:
        @router.post("/x", dependencies=[Depends(rate_limited("auth/x"))])
    """

    async def _check(
        request: Request,
        limiter: RateLimiter = Depends(get_rate_limiter),
    ) -> None:
        client_ip = resolve_client_ip(request)
        if not await limiter.check(client_ip, endpoint):
            retry_after = await limiter.time_until_reset(client_ip, endpoint)
            raise RateLimitExceededError(endpoint, retry_after or limiter.window_seconds)

    return _check
