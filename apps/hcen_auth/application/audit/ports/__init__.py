"""Audit Ports."""

from apps.hcen_auth.application.audit.ports.audit_sink import (
    AuthAuditEvent,
    AuthAuditEventType,
    AuthAuditSink,
    short_ref,
)

__all__ = ["AuthAuditEvent", "AuthAuditEventType", "AuthAuditSink", "short_ref"]
