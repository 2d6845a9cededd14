"""Application Exceptions."""

from apps.hcen_auth.application.common.exceptions.base import ApplicationError
from apps.hcen_auth.application.common.exceptions.gateway import (
    GatewayError,
    StoreUnavailableError,
    UserDirectoryUnavailableError,
)

__all__ = [
    "ApplicationError",
    "GatewayError",
    "StoreUnavailableError",
    "UserDirectoryUnavailableError",
]
