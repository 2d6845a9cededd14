"""LoggingAuditSink tests."""

import logging
from datetime import datetime, timezone

import pytest

from apps.hcen_auth.application.audit.ports import AuthAuditEvent, AuthAuditEventType
from apps.hcen_auth.domain.enums import ClientType
from apps.hcen_auth.infrastructure.audit import LoggingAuditSink


class TestLoggingAuditSink:
    @pytest.mark.asyncio
    async def test_failure_event_is_logged_with_ecs_fields(self, caplog) -> None:
        # Arrange
        sink = LoggingAuditSink()
        event = AuthAuditEvent(
            event_type=AuthAuditEventType.EXCHANGE_FAILED,
            occurred_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
            client_type=ClientType.MOBILE,
            state_ref="abcd1234",
            client_ip="10.0.0.1",
            reason="PKCE_VALIDATION_FAILED",
        )

        # Act
        with caplog.at_level(logging.INFO, logger="hcen_auth.audit"):
            await sink.record(event)

        # Assert
        record = caplog.records[-1]
        assert record.name == "hcen_auth.audit"
        assert record.getMessage() == "auth.exchange_failed"
        assert getattr(record, "event.outcome") == "failure"
        assert getattr(record, "event.reason") == "PKCE_VALIDATION_FAILED"
        assert getattr(record, "auth.client_type") == "MOBILE"
        assert getattr(record, "client.ip") == "10.0.0.1"

    @pytest.mark.asyncio
    async def test_session_event_is_a_success(self, caplog) -> None:
        sink = LoggingAuditSink()
        event = AuthAuditEvent(
            event_type=AuthAuditEventType.SESSION_CREATED,
            occurred_at=datetime.now(timezone.utc),
            subject_id="12345678",
        )

        with caplog.at_level(logging.INFO, logger="hcen_auth.audit"):
            await sink.record(event)

        record = caplog.records[-1]
        assert getattr(record, "event.outcome") == "success"
        assert getattr(record, "user.id") == "12345678"
        assert getattr(record, "auth.client_type") is None
