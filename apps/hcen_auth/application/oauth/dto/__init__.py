"""OAuth DTOs."""

from apps.hcen_auth.application.oauth.dto.oauth import (
    CallbackRequest,
    ExchangeResult,
    InitiateLoginRequest,
    InitiateLoginResponse,
    LoginResult,
    UserInfo,
)

__all__ = [
    "CallbackRequest",
    "ExchangeResult",
    "InitiateLoginRequest",
    "InitiateLoginResponse",
    "LoginResult",
    "UserInfo",
]
