"""Redis adapters."""

from apps.hcen_auth.infrastructure.persistence_redis.adapters.kv_store_redis import (
    RedisKeyValueStore,
)

__all__ = ["RedisKeyValueStore"]
