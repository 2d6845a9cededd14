"""Logging Audit Sink.

AuthAuditSink implementation that emits one ECS record per event on the
``hcen_auth.audit`` logger.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from apps.hcen_auth.application.audit.ports import AuthAuditEvent

AUDIT_LOGGER_NAME = "hcen_auth.audit"

_FAILURE_EVENTS = frozenset({"EXCHANGE_FAILED", "RATE_LIMITED"})


class LoggingAuditSink:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)

    async def record(self, event: "AuthAuditEvent") -> None:
        outcome = "failure" if event.event_type.value in _FAILURE_EVENTS else "success"
        self._logger.info(
            "auth.%s",
            event.event_type.value.lower(),
            extra={
                "event.action": event.event_type.value,
                "event.outcome": outcome,
                "event.reason": event.reason,
                "client.ip": event.client_ip,
                "user.id": event.subject_id,
                "auth.client_type": event.client_type.value if event.client_type else None,
                "auth.state_ref": event.state_ref,
                "auth.session_ref": event.session_ref,
                "auth.details": dict(event.details),
                "auth.occurred_at": event.occurred_at.isoformat(),
            },
        )
