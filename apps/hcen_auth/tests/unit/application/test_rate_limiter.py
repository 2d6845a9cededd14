"""RateLimiter tests."""

import asyncio

import pytest

from apps.hcen_auth.application.audit.ports import AuthAuditEventType
from apps.hcen_auth.application.ratelimit.services import RateLimiter

IP = "10.0.0.1"
ENDPOINT = "/auth/login/initiate"


class TestRateLimiter:
    @pytest.fixture
    def limiter(self, state_store, audit_sink, clock) -> RateLimiter:
        return RateLimiter(
            state_store,
            audit_sink,
            window_seconds=60,
            max_requests=5,
            endpoint_limits={"auth/callback": 2},
            clock=clock,
        )

    @pytest.mark.asyncio
    async def test_request_over_limit_is_denied(self, limiter, audit_sink) -> None:
        # Act
        decisions = [await limiter.check(IP, ENDPOINT) for _ in range(6)]

        # Assert
        assert decisions == [True] * 5 + [False]
        assert audit_sink.types == [AuthAuditEventType.RATE_LIMITED]

    @pytest.mark.asyncio
    async def test_new_window_admits_again(self, limiter, clock) -> None:
        for _ in range(6):
            await limiter.check(IP, ENDPOINT)
        clock.advance(61)

        assert await limiter.check(IP, ENDPOINT) is True
        assert await limiter.current_count(IP, ENDPOINT) == 1

    @pytest.mark.asyncio
    async def test_counter_key_is_normalized(self, limiter, state_store) -> None:
        await limiter.check(IP, ENDPOINT)

        assert state_store.keys() == ["ratelimit:10.0.0.1:auth:login:initiate"]

    @pytest.mark.asyncio
    async def test_window_ttl_is_not_extended_by_later_requests(self, limiter, clock) -> None:
        await limiter.check(IP, ENDPOINT)
        clock.advance(40)
        await limiter.check(IP, ENDPOINT)

        assert await limiter.time_until_reset(IP, ENDPOINT) == 20

    @pytest.mark.asyncio
    async def test_endpoint_override_applies(self, limiter) -> None:
        decisions = [await limiter.check(IP, "/auth/callback") for _ in range(3)]

        assert decisions == [True, True, False]
        assert limiter.limit_for("/auth/callback") == 2
        assert limiter.limit_for("/auth/logout") == 5

    @pytest.mark.asyncio
    async def test_counters_are_per_ip_and_endpoint(self, limiter) -> None:
        for _ in range(5):
            await limiter.check(IP, ENDPOINT)

        assert await limiter.check("10.0.0.2", ENDPOINT) is True
        assert await limiter.check(IP, "/auth/logout") is True

    @pytest.mark.asyncio
    async def test_concurrent_checks_admit_exactly_the_limit(self, limiter) -> None:
        decisions = await asyncio.gather(*(limiter.check(IP, ENDPOINT) for _ in range(20)))

        assert decisions.count(True) == 5

    @pytest.mark.asyncio
    async def test_empty_key_parts_are_denied(self, limiter) -> None:
        assert await limiter.check("", ENDPOINT) is False
        assert await limiter.check(IP, "") is False

    @pytest.mark.asyncio
    async def test_store_outage_fails_open(self, limiter, state_store) -> None:
        state_store.failure = ConnectionError("redis down")

        assert await limiter.check(IP, ENDPOINT) is True

    @pytest.mark.asyncio
    async def test_introspection(self, limiter, clock) -> None:
        # Arrange
        for _ in range(3):
            await limiter.check(IP, ENDPOINT)
        clock.advance(15)

        # Act
        counter = await limiter.counter(IP, ENDPOINT)

        # Assert
        assert await limiter.remaining(IP, ENDPOINT) == 2
        assert counter.count == 3
        assert counter.remaining == 2
        assert counter.exceeded is False
        assert counter.endpoint == "auth:login:initiate"
        assert (clock() - counter.window_start).total_seconds() == 15

    @pytest.mark.asyncio
    async def test_counter_without_open_window(self, limiter) -> None:
        counter = await limiter.counter(IP, ENDPOINT)

        assert counter.count == 0
        assert counter.window_start is None
        assert await limiter.time_until_reset(IP, ENDPOINT) == 0

    @pytest.mark.asyncio
    async def test_reset_and_reset_all(self, limiter, state_store) -> None:
        await limiter.check(IP, ENDPOINT)
        await limiter.check(IP, "/auth/logout")
        await limiter.check("10.0.0.2", ENDPOINT)

        assert await limiter.reset(IP, ENDPOINT) is True
        assert await limiter.reset_all_for_ip(IP) == 1
        assert state_store.keys() == ["ratelimit:10.0.0.2:auth:login:initiate"]
