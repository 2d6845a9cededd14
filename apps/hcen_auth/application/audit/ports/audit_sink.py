"""AuthAuditSink Port.

Services call ``record`` explicitly after every state transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from apps.hcen_auth.domain.enums import ClientType


class AuthAuditEventType(str, Enum):
    STATE_ISSUED = "STATE_ISSUED"
    STATE_CONSUMED = "STATE_CONSUMED"
    EXCHANGE_SUCCEEDED = "EXCHANGE_SUCCEEDED"
    EXCHANGE_FAILED = "EXCHANGE_FAILED"
    SESSION_CREATED = "SESSION_CREATED"
    SESSION_REFRESHED = "SESSION_REFRESHED"
    SESSION_INVALIDATED = "SESSION_INVALIDATED"
    RATE_LIMITED = "RATE_LIMITED"


@dataclass(frozen=True, slots=True)
class AuthAuditEvent:
    """Structured auth event.

    Token-like identifiers are carried as short references only.
    """

    event_type: AuthAuditEventType
    occurred_at: datetime
    client_type: "ClientType | None" = None
    subject_id: str | None = None
    state_ref: str | None = None
    session_ref: str | None = None
    client_ip: str | None = None
    reason: str | None = None
    details: dict[str, str] = field(default_factory=dict)


class AuthAuditSink(Protocol):
    """Receives auth events."""

    async def record(self, event: AuthAuditEvent) -> None: ...


def short_ref(value: str | None) -> str | None:
    """First 8 characters of a token, safe for logs and audit."""
    return value[:8] if value else None
