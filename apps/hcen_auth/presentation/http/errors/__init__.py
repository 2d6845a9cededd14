"""HTTP error handling."""

from apps.hcen_auth.presentation.http.errors.handlers import (
    register_exception_handlers,
    status_for_auth_error,
)

__all__ = ["register_exception_handlers", "status_for_auth_error"]
