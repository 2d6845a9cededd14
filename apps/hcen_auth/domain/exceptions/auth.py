"""Authentication error taxonomy.

A single exception type carries an ``AuthErrorKind`` tag. Callers branch on
``error.kind`` instead of on subclasses; the HTTP boundary matches every kind
explicitly.
"""

from __future__ import annotations

from enum import Enum

from apps.hcen_auth.domain.exceptions.base import DomainError


class AuthErrorKind(str, Enum):
    """Authentication failure kinds."""

    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    INVALID_STATE = "INVALID_STATE"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    OAUTH_ERROR = "OAUTH_ERROR"


class OAuthFailureSource(str, Enum):
    """Where an OAuth failure was detected."""

    LOCAL = "LOCAL"  # request validation / PKCE check inside the broker
    UPSTREAM = "UPSTREAM"  # IdP answered with an error
    NETWORK = "NETWORK"  # transport failure or timeout talking to the IdP


class AuthenticationError(DomainError):
    """Terminal authentication failure for the current request.

    Attributes:
        kind: Failure kind
        code: Stable error code returned to clients
        message: Human readable message (safe to expose)
        oauth_error: Upstream OAuth ``error`` value, when known
        oauth_error_description: Upstream ``error_description``, when known
        source: Origin of an OAUTH_ERROR
    """

    def __init__(
        self,
        kind: AuthErrorKind,
        message: str,
        *,
        code: str | None = None,
        oauth_error: str | None = None,
        oauth_error_description: str | None = None,
        source: OAuthFailureSource | None = None,
    ) -> None:
        self.kind = kind
        self.code = code or kind.value
        self.oauth_error = oauth_error
        self.oauth_error_description = oauth_error_description
        self.source = source
        super().__init__(message)

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    @property
    def is_invalid_token(self) -> bool:
        """TOKEN_EXPIRED is a specialization of INVALID_TOKEN."""
        return self.kind in (AuthErrorKind.INVALID_TOKEN, AuthErrorKind.TOKEN_EXPIRED)

    @property
    def is_local_failure(self) -> bool:
        return self.kind is AuthErrorKind.OAUTH_ERROR and self.source is OAuthFailureSource.LOCAL

    @classmethod
    def generic(cls, message: str = "Authentication failed") -> AuthenticationError:
        return cls(AuthErrorKind.AUTHENTICATION_ERROR, message)

    @classmethod
    def invalid_state(cls, message: str = "Invalid or expired state") -> AuthenticationError:
        return cls(AuthErrorKind.INVALID_STATE, message)

    @classmethod
    def invalid_token(cls, message: str = "Invalid token") -> AuthenticationError:
        return cls(AuthErrorKind.INVALID_TOKEN, message)

    @classmethod
    def token_expired(cls, message: str = "Token has expired") -> AuthenticationError:
        return cls(AuthErrorKind.TOKEN_EXPIRED, message)

    @classmethod
    def oauth(
        cls,
        message: str,
        *,
        code: str = "OAUTH_ERROR",
        oauth_error: str | None = None,
        oauth_error_description: str | None = None,
        source: OAuthFailureSource = OAuthFailureSource.UPSTREAM,
    ) -> AuthenticationError:
        return cls(
            AuthErrorKind.OAUTH_ERROR,
            message,
            code=code,
            oauth_error=oauth_error,
            oauth_error_description=oauth_error_description,
            source=source,
        )

    @classmethod
    def invalid_request(cls, message: str) -> AuthenticationError:
        """Malformed callback/initiation input, rejected before any I/O."""
        return cls.oauth(
            message,
            code="INVALID_REQUEST",
            oauth_error="invalid_request",
            source=OAuthFailureSource.LOCAL,
        )

    @classmethod
    def pkce_mismatch(cls) -> AuthenticationError:
        return cls.oauth(
            "PKCE code verifier does not match the stored challenge",
            code="PKCE_VALIDATION_FAILED",
            oauth_error="invalid_grant",
            source=OAuthFailureSource.LOCAL,
        )

    def __repr__(self) -> str:
        return f"AuthenticationError(kind={self.kind.value}, code={self.code!r})"
