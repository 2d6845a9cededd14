"""HTTP Schemas."""

from apps.hcen_auth.presentation.http.schemas.auth import (
    ErrorResponse,
    InitiateLoginBody,
    InitiateLoginResponse,
    LoginResponse,
    MobileCallbackBody,
    SessionResponse,
    UserResponse,
)

__all__ = [
    "ErrorResponse",
    "InitiateLoginBody",
    "InitiateLoginResponse",
    "LoginResponse",
    "MobileCallbackBody",
    "SessionResponse",
    "UserResponse",
]
