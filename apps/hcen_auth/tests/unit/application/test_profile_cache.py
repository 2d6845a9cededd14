"""ProfileCacheInvalidator tests."""

import pytest

from apps.hcen_auth.application.cache.services import ProfileCacheInvalidator


class TestProfileCacheInvalidator:
    @pytest.fixture
    def cache(self, cache_store) -> ProfileCacheInvalidator:
        return ProfileCacheInvalidator(cache_store)

    @pytest.mark.asyncio
    async def test_profile_invalidation(self, cache, cache_store) -> None:
        await cache_store.set("user:profile:12345678", '{"firstName": "Ana"}', 900)

        assert await cache.cached_profile("12345678") == '{"firstName": "Ana"}'
        assert await cache.invalidate_user_profile("12345678") is True
        assert await cache.cached_profile("12345678") is None
        assert await cache.invalidate_user_profile("12345678") is False

    @pytest.mark.asyncio
    async def test_single_policy_decision(self, cache, cache_store) -> None:
        await cache_store.set("policy:cache:12345678:CARDIOLOGY:LAB_RESULT", "PERMIT", 300)

        removed = await cache.invalidate_policy_decision("12345678", "CARDIOLOGY", "LAB_RESULT")

        assert removed is True
        assert cache_store.keys() == []

    @pytest.mark.asyncio
    async def test_all_policy_decisions_for_one_subject(self, cache, cache_store) -> None:
        # Arrange
        await cache_store.set("policy:cache:12345678:CARDIOLOGY:LAB_RESULT", "PERMIT", 300)
        await cache_store.set("policy:cache:12345678:GENERAL:IMAGING", "DENY", 300)
        await cache_store.set("policy:cache:87654321:GENERAL:IMAGING", "PERMIT", 300)

        # Act
        removed = await cache.invalidate_policy_decisions("12345678")

        # Assert
        assert removed == 2
        assert cache_store.keys() == ["policy:cache:87654321:GENERAL:IMAGING"]
