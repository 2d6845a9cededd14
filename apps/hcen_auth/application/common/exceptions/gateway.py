"""Gateway (outbound port) exceptions."""

from __future__ import annotations

from apps.hcen_auth.application.common.exceptions.base import ApplicationError


class GatewayError(ApplicationError):
    """An outbound dependency failed."""


class StoreUnavailableError(GatewayError):
    """Key-value store operation failed."""

    def __init__(self, pool: str, operation: str, reason: str) -> None:
        self.pool = pool
        self.operation = operation
        super().__init__(f"{pool} store {operation} failed: {reason}")


class UserDirectoryUnavailableError(GatewayError):
    """User directory lookup failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"User directory unavailable: {reason}")
