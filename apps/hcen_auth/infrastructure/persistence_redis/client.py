"""Redis Client Provider.

One client per logical pool (Session, Cache, State). Handles are built
explicitly and passed to each adapter's constructor.

Retry:
    - ExponentialBackoff, MAX_RETRIES attempts
    - only on ConnectionError / TimeoutError
    - health_check_interval: 30s
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff
from redis.exceptions import ConnectionError, TimeoutError

from apps.hcen_auth.application.common.ports import StorePool

if TYPE_CHECKING:
    import redis.asyncio as aioredis

HEALTH_CHECK_INTERVAL = 30  # seconds
MAX_CONNECTIONS = 50
SOCKET_CONNECT_TIMEOUT = 5.0  # seconds
SOCKET_TIMEOUT = 5.0  # seconds
RETRY_ON_ERROR = [ConnectionError, TimeoutError]
MAX_RETRIES = 3


@lru_cache
def build_async_client(redis_url: str) -> "aioredis.Redis":
    """Async Redis client for one URL (cached per URL).

    Key configurations:
    - socket_keepalive: keep idle connections alive
    - retry: reconnect on transient ConnectionError / TimeoutError
    - health_check_interval: periodic connection check
    - max_connections: bounded pool
    """
    import redis.asyncio as aioredis

    retry = Retry(ExponentialBackoff(), retries=MAX_RETRIES)

    return aioredis.from_url(
        redis_url,
        encoding="utf-8",
        decode_responses=True,
        health_check_interval=HEALTH_CHECK_INTERVAL,
        socket_keepalive=True,
        socket_connect_timeout=SOCKET_CONNECT_TIMEOUT,
        socket_timeout=SOCKET_TIMEOUT,
        max_connections=MAX_CONNECTIONS,
        retry=retry,
        retry_on_error=RETRY_ON_ERROR,
    )


def pool_url(pool: StorePool) -> str:
    """Configured URL for a pool.

    Environment:
        - HCEN_AUTH_REDIS_SESSION_URL (default: redis://localhost:6379/0)
        - HCEN_AUTH_REDIS_CACHE_URL (default: redis://localhost:6379/1)
        - HCEN_AUTH_REDIS_STATE_URL (default: redis://localhost:6379/2)
    """
    from apps.hcen_auth.setup.config import get_settings

    settings = get_settings()
    return {
        StorePool.SESSION: settings.redis_session_url,
        StorePool.CACHE: settings.redis_cache_url,
        StorePool.STATE: settings.redis_state_url,
    }[pool]


def get_pool_redis(pool: StorePool) -> "aioredis.Redis":
    return build_async_client(pool_url(pool))


async def close_all() -> None:
    """Close every client built so far."""
    for pool in StorePool:
        client = get_pool_redis(pool)
        await client.aclose()
    build_async_client.cache_clear()
