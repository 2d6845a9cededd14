"""OAuth DTOs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from apps.hcen_auth.domain.enums import ClientType

if TYPE_CHECKING:
    from apps.hcen_auth.application.oauth.ports import ProviderTokens
    from apps.hcen_auth.domain.entities import Session


@dataclass(frozen=True, slots=True)
class InitiateLoginRequest:
    """Authorization redirect request."""

    client_type: ClientType
    redirect_uri: str
    code_challenge: str | None = None
    client_ip: str | None = None


@dataclass(frozen=True, slots=True)
class InitiateLoginResponse:
    authorization_url: str
    state: str
    expires_in: int


@dataclass(frozen=True, slots=True)
class CallbackRequest:
    """Callback input, shared by the WEB (GET) and MOBILE (POST) variants."""

    code: str
    state: str
    client_type: ClientType
    redirect_uri: str
    code_verifier: str | None = None
    client_ip: str | None = None


@dataclass(frozen=True, slots=True)
class ExchangeResult:
    """Outcome of a successful code exchange."""

    subject_id: str
    client_type: ClientType
    claims: dict[str, Any]
    tokens: "ProviderTokens"


@dataclass(frozen=True, slots=True)
class UserInfo:
    ci: str
    inus_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str = "PATIENT"

    def as_attributes(self) -> dict[str, str]:
        attributes = {"role": self.role}
        if self.inus_id:
            attributes["inusId"] = self.inus_id
        if self.first_name:
            attributes["firstName"] = self.first_name
        if self.last_name:
            attributes["lastName"] = self.last_name
        return attributes


@dataclass(frozen=True, slots=True)
class LoginResult:
    session: "Session"
    session_token: str
    expires_in: int
    user: UserInfo
