"""Domain Exceptions."""

from apps.hcen_auth.domain.exceptions.auth import (
    AuthenticationError,
    AuthErrorKind,
    OAuthFailureSource,
)
from apps.hcen_auth.domain.exceptions.base import DomainError
from apps.hcen_auth.domain.exceptions.crypto import CryptoUnavailableError

__all__ = [
    "DomainError",
    "AuthenticationError",
    "AuthErrorKind",
    "OAuthFailureSource",
    "CryptoUnavailableError",
]
