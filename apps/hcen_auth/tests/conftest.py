"""Test Configuration and Fixtures."""

from __future__ import annotations

import os
from typing import Generator

import pytest

from apps.hcen_auth.application.common.ports import StorePool
from apps.hcen_auth.tests.unit.fakes import (
    FakeClock,
    IdpStub,
    InMemoryKeyValueStore,
    RecordingAuditSink,
)


# ============================================================
# Environment
# ============================================================


@pytest.fixture(scope="session", autouse=True)
def _test_env() -> Generator[None, None, None]:
    """Set test environment variables."""
    original = os.environ.copy()
    os.environ.update(
        {
            "HCEN_AUTH_ENVIRONMENT": "test",
            "HCEN_AUTH_JWT_SECRET_KEY": "test-secret-key-for-testing-only",
        }
    )
    yield
    os.environ.clear()
    os.environ.update(original)


# ============================================================
# Fakes
# ============================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def state_store(clock: FakeClock) -> InMemoryKeyValueStore:
    """State pool."""
    return InMemoryKeyValueStore(StorePool.STATE, clock)


@pytest.fixture
def session_store(clock: FakeClock) -> InMemoryKeyValueStore:
    """Session pool."""
    return InMemoryKeyValueStore(StorePool.SESSION, clock)


@pytest.fixture
def cache_store(clock: FakeClock) -> InMemoryKeyValueStore:
    """Cache pool."""
    return InMemoryKeyValueStore(StorePool.CACHE, clock)


@pytest.fixture
def audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink()


@pytest.fixture
def idp() -> IdpStub:
    return IdpStub()
