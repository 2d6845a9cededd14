"""gub.uy wire schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from apps.hcen_auth.application.oauth.ports import ProviderTokens


class GubUyTokenResponse(BaseModel):
    """Token endpoint response body."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    token_type: str = "Bearer"
    expires_in: Optional[int] = None
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None
    scope: Optional[str] = None

    def to_tokens(self) -> ProviderTokens:
        return ProviderTokens(
            access_token=self.access_token,
            token_type=self.token_type,
            expires_in=self.expires_in,
            id_token=self.id_token,
            refresh_token=self.refresh_token,
            scope=self.scope,
        )


class OAuthErrorResponse(BaseModel):
    """RFC 6749 error body."""

    model_config = ConfigDict(extra="ignore")

    error: str
    error_description: Optional[str] = None
