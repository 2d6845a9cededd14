"""RateLimiter - fixed-window counters per (client IP, endpoint).

Counters live in the State pool under ``ratelimit:{ip}:{endpoint}``. The
first request in a window creates the key with TTL = window length; the
increment and the read of the new count are one atomic store operation.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Mapping

from apps.hcen_auth.application.audit.ports import AuthAuditEvent, AuthAuditEventType
from apps.hcen_auth.application.common.clock import utc_now
from apps.hcen_auth.application.common.exceptions import StoreUnavailableError
from apps.hcen_auth.application.common.keys import (
    normalize_endpoint,
    rate_limit_key,
    rate_limit_pattern,
)
from apps.hcen_auth.domain.entities import RateLimitCounter

if TYPE_CHECKING:
    from apps.hcen_auth.application.audit.ports import AuthAuditSink
    from apps.hcen_auth.application.common.clock import Clock
    from apps.hcen_auth.application.common.ports import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = 60
DEFAULT_MAX_REQUESTS = 20


class RateLimiter:
    """Admission control. Exceeding the limit is a decision, not an error."""

    def __init__(
        self,
        store: "KeyValueStore",
        audit_sink: "AuthAuditSink",
        *,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        endpoint_limits: Mapping[str, int] | None = None,
        clock: "Clock" = utc_now,
    ) -> None:
        self._store = store
        self._audit_sink = audit_sink
        self._window_seconds = window_seconds
        self._max_requests = max_requests
        self._endpoint_limits = {
            normalize_endpoint(endpoint): limit
            for endpoint, limit in (endpoint_limits or {}).items()
        }
        self._clock = clock

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    def limit_for(self, endpoint: str) -> int:
        return self._endpoint_limits.get(normalize_endpoint(endpoint), self._max_requests)

    async def check(self, client_ip: str, endpoint: str) -> bool:
        """Count this request and decide whether it is admitted.

        Returns:
            False once the window's count exceeds the endpoint limit.
            True when the store is unavailable (fail open).
        """
        if not client_ip or not endpoint:
            logger.warning(
                "Rate limit check with empty key part",
                extra={"client_ip": client_ip, "endpoint": endpoint},
            )
            return False

        key = rate_limit_key(client_ip, endpoint)
        try:
            count = await self._store.increment_window(key, self._window_seconds)
        except StoreUnavailableError:
            logger.exception(
                "Rate limit store unavailable, admitting request",
                extra={"client_ip": client_ip, "endpoint": endpoint},
            )
            return True

        limit = self.limit_for(endpoint)
        if count > limit:
            logger.warning(
                "Rate limit exceeded",
                extra={
                    "client_ip": client_ip,
                    "endpoint": endpoint,
                    "count": count,
                    "limit": limit,
                },
            )
            await self._audit_sink.record(
                AuthAuditEvent(
                    event_type=AuthAuditEventType.RATE_LIMITED,
                    occurred_at=self._clock(),
                    client_ip=client_ip,
                    details={"endpoint": normalize_endpoint(endpoint), "count": str(count)},
                )
            )
            return False
        return True

    async def current_count(self, client_ip: str, endpoint: str) -> int:
        raw = await self._store.get(rate_limit_key(client_ip, endpoint))
        return int(raw) if raw else 0

    async def remaining(self, client_ip: str, endpoint: str) -> int:
        count = await self.current_count(client_ip, endpoint)
        return max(0, self.limit_for(endpoint) - count)

    async def time_until_reset(self, client_ip: str, endpoint: str) -> int:
        """Seconds until the current window closes; 0 when no window is open."""
        remaining = await self._store.ttl(rate_limit_key(client_ip, endpoint))
        return remaining if remaining is not None else 0

    async def counter(self, client_ip: str, endpoint: str) -> RateLimitCounter:
        """Snapshot of the current window."""
        count = await self.current_count(client_ip, endpoint)
        window_start = None
        if count:
            elapsed = self._window_seconds - await self.time_until_reset(client_ip, endpoint)
            window_start = self._clock() - timedelta(seconds=elapsed)
        return RateLimitCounter(
            client_ip=client_ip,
            endpoint=normalize_endpoint(endpoint),
            count=count,
            window_start=window_start,
            limit=self.limit_for(endpoint),
        )

    async def reset(self, client_ip: str, endpoint: str) -> bool:
        removed = await self._store.delete(rate_limit_key(client_ip, endpoint))
        logger.info(
            "Rate limit reset",
            extra={"client_ip": client_ip, "endpoint": endpoint, "removed": removed},
        )
        return removed

    async def reset_all_for_ip(self, client_ip: str) -> int:
        removed = await self._store.delete_matching(rate_limit_pattern(client_ip))
        logger.info(
            "Rate limits reset for client",
            extra={"client_ip": client_ip, "removed": removed},
        )
        return removed
