"""Auth HTTP Schemas.

JSON field names are camelCase for the existing web and mobile clients.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from apps.hcen_auth.domain.enums import ClientType


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class InitiateLoginBody(_CamelModel):
    """Authorization redirect request."""

    client_type: ClientType = Field(..., alias="clientType", description="WEB or MOBILE")
    redirect_uri: str = Field(..., alias="redirectUri", min_length=1, description="Callback URI")
    code_challenge: Optional[str] = Field(
        None, alias="codeChallenge", description="PKCE S256 challenge (required for MOBILE)"
    )


class InitiateLoginResponse(_CamelModel):
    authorization_url: str = Field(..., alias="authorizationUrl", description="IdP authorization URL")
    state: str = Field(..., description="CSRF state value")
    expires_in: int = Field(..., alias="expiresIn", description="State lifetime in seconds")


class MobileCallbackBody(_CamelModel):
    """Mobile callback delivered as a request body."""

    code: str = Field(..., min_length=1, description="Authorization code")
    state: str = Field(..., min_length=1, description="State value")
    redirect_uri: str = Field(..., alias="redirectUri", min_length=1)
    code_verifier: Optional[str] = Field(None, alias="codeVerifier", description="PKCE verifier")
    client_type: ClientType = Field(ClientType.MOBILE, alias="clientType")


class UserResponse(_CamelModel):
    ci: str = Field(..., description="Citizen ID")
    inus_id: Optional[str] = Field(None, alias="inusId")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    role: str = Field(..., description="Role")


class LoginResponse(_CamelModel):
    session_token: str = Field(..., alias="sessionToken", description="Signed session token")
    token_type: str = Field("Bearer", alias="tokenType")
    expires_in: int = Field(..., alias="expiresIn", description="Session lifetime in seconds")
    user: Optional[UserResponse] = None


class SessionResponse(_CamelModel):
    subject_id: str = Field(..., alias="subjectId")
    client_type: ClientType = Field(..., alias="clientType")
    issued_at: datetime = Field(..., alias="issuedAt")
    expires_at: datetime = Field(..., alias="expiresAt")
    expires_in: int = Field(..., alias="expiresIn")
    attributes: dict[str, str] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    timestamp: datetime = Field(..., description="UTC timestamp")
