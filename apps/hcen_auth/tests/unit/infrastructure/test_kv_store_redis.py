"""RedisKeyValueStore tests.

The Redis client is mocked; these tests pin the commands each
operation issues.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from apps.hcen_auth.application.common.exceptions import StoreUnavailableError
from apps.hcen_auth.application.common.ports import StorePool
from apps.hcen_auth.infrastructure.persistence_redis import RedisKeyValueStore


async def _aiter(items):
    for item in items:
        yield item


class TestRedisKeyValueStore:
    @pytest.fixture
    def mock_redis(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def store(self, mock_redis: AsyncMock) -> RedisKeyValueStore:
        return RedisKeyValueStore(mock_redis, StorePool.STATE)

    @pytest.mark.asyncio
    async def test_set_uses_setex(self, store, mock_redis) -> None:
        await store.set("oauth:state:abc", "{}", 600)

        mock_redis.setex.assert_awaited_once_with("oauth:state:abc", 600, "{}")

    @pytest.mark.asyncio
    async def test_get_and_delete_is_a_single_getdel(self, store, mock_redis) -> None:
        # Arrange
        mock_redis.getdel.return_value = '{"nonce": "n"}'

        # Act
        value = await store.get_and_delete("oauth:state:abc")

        # Assert
        assert value == '{"nonce": "n"}'
        mock_redis.getdel.assert_awaited_once_with("oauth:state:abc")
        mock_redis.get.assert_not_called()
        mock_redis.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_reports_whether_key_existed(self, store, mock_redis) -> None:
        mock_redis.delete.return_value = 0

        assert await store.delete("session:x") is False

    @pytest.mark.asyncio
    async def test_ttl_maps_missing_key_to_none(self, store, mock_redis) -> None:
        mock_redis.ttl.return_value = -2

        assert await store.ttl("missing") is None

    @pytest.mark.asyncio
    async def test_ttl_maps_persistent_key_to_none(self, store, mock_redis) -> None:
        mock_redis.ttl.return_value = -1

        assert await store.ttl("persistent") is None

    @pytest.mark.asyncio
    async def test_expire_reports_whether_key_existed(self, store, mock_redis) -> None:
        mock_redis.expire.return_value = True

        assert await store.expire("session:x", 3600) is True
        mock_redis.expire.assert_awaited_once_with("session:x", 3600)

    @pytest.mark.asyncio
    async def test_replace_only_overwrites_existing_key(self, store, mock_redis) -> None:
        # Arrange
        mock_redis.set.return_value = None

        # Act
        written = await store.replace("session:x", "{}", 3600)

        # Assert
        assert written is False
        mock_redis.set.assert_awaited_once_with("session:x", "{}", ex=3600, xx=True)

    @pytest.mark.asyncio
    async def test_replace_reports_success(self, store, mock_redis) -> None:
        mock_redis.set.return_value = True

        assert await store.replace("session:x", "{}", 3600) is True

    @pytest.mark.asyncio
    async def test_increment_window_runs_in_one_transaction(self, store, mock_redis) -> None:
        # Arrange
        pipe = MagicMock()
        pipe.execute = AsyncMock(return_value=[True, 1])
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=pipe)
        context.__aexit__ = AsyncMock(return_value=False)
        mock_redis.pipeline = MagicMock(return_value=context)

        # Act
        count = await store.increment_window("ratelimit:1.2.3.4:auth:callback", 60)

        # Assert
        assert count == 1
        mock_redis.pipeline.assert_called_once_with(transaction=True)
        pipe.set.assert_called_once_with("ratelimit:1.2.3.4:auth:callback", 0, ex=60, nx=True)
        pipe.incr.assert_called_once_with("ratelimit:1.2.3.4:auth:callback")

    @pytest.mark.asyncio
    async def test_delete_matching_scans_and_deletes(self, store, mock_redis) -> None:
        mock_redis.scan_iter = MagicMock(return_value=_aiter(["ratelimit:ip:a", "ratelimit:ip:b"]))
        mock_redis.delete.return_value = 1

        removed = await store.delete_matching("ratelimit:ip:*")

        assert removed == 2
        assert mock_redis.scan_iter.call_args.kwargs["match"] == "ratelimit:ip:*"

    @pytest.mark.asyncio
    async def test_redis_errors_become_store_unavailable(self, store, mock_redis) -> None:
        mock_redis.get.side_effect = RedisConnectionError("connection refused")

        with pytest.raises(StoreUnavailableError) as exc_info:
            await store.get("session:x")

        assert exc_info.value.pool == "state"
        assert exc_info.value.operation == "get"
