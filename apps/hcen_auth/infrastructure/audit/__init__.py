"""Audit adapters."""

from apps.hcen_auth.infrastructure.audit.logging_audit_sink import LoggingAuditSink

__all__ = ["LoggingAuditSink"]
