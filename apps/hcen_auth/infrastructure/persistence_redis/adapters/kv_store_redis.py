"""Redis KeyValueStore.

KeyValueStore port implementation for one pool.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from redis.exceptions import RedisError

from apps.hcen_auth.application.common.exceptions import StoreUnavailableError
from apps.hcen_auth.application.common.ports import StorePool
from apps.hcen_auth.infrastructure.persistence_redis.constants import SCAN_BATCH_SIZE

if TYPE_CHECKING:
    import redis.asyncio as aioredis


class RedisKeyValueStore:
    """Redis-backed key-value store.

    Atomic primitives:
        - get_and_delete: GETDEL (Redis >= 6.2)
        - replace: SET key value EX ttl XX
        - increment_window: MULTI { SET key 0 EX ttl NX; INCR key }
    """

    def __init__(self, redis: "aioredis.Redis", pool: StorePool) -> None:
        self._redis = redis
        self._pool = pool

    @property
    def pool(self) -> StorePool:
        return self._pool

    @contextmanager
    def _translate(self, operation: str) -> Iterator[None]:
        try:
            yield
        except RedisError as e:
            raise StoreUnavailableError(self._pool.value, operation, str(e)) from e

    async def get(self, key: str) -> str | None:
        with self._translate("get"):
            return await self._redis.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._translate("set"):
            await self._redis.setex(key, ttl_seconds, value)

    async def delete(self, key: str) -> bool:
        with self._translate("delete"):
            return bool(await self._redis.delete(key))

    async def exists(self, key: str) -> bool:
        with self._translate("exists"):
            return bool(await self._redis.exists(key))

    async def expire(self, key: str, ttl_seconds: int) -> bool:
        with self._translate("expire"):
            return bool(await self._redis.expire(key, ttl_seconds))

    async def replace(self, key: str, value: str, ttl_seconds: int) -> bool:
        with self._translate("replace"):
            return bool(await self._redis.set(key, value, ex=ttl_seconds, xx=True))

    async def ttl(self, key: str) -> int | None:
        with self._translate("ttl"):
            remaining = await self._redis.ttl(key)
        # -2: absent, -1: no expiry
        return remaining if remaining >= 0 else None

    async def get_and_delete(self, key: str) -> str | None:
        with self._translate("getdel"):
            return await self._redis.getdel(key)

    async def increment_window(self, key: str, window_seconds: int) -> int:
        with self._translate("incr"):
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.set(key, 0, ex=window_seconds, nx=True)
                pipe.incr(key)
                _, count = await pipe.execute()
        return int(count)

    async def delete_matching(self, pattern: str) -> int:
        deleted = 0
        with self._translate("scan"):
            async for key in self._redis.scan_iter(match=pattern, count=SCAN_BATCH_SIZE):
                deleted += await self._redis.delete(key)
        return deleted
