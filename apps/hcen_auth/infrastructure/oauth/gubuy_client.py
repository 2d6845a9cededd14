"""gub.uy OIDC Client.

IdentityProviderGateway implementation for ID Uruguay (gub.uy).
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from apps.hcen_auth.application.oauth.ports import ProviderTokens
from apps.hcen_auth.domain.enums import ClientType
from apps.hcen_auth.domain.exceptions import AuthenticationError, OAuthFailureSource
from apps.hcen_auth.infrastructure.oauth.schemas import GubUyTokenResponse, OAuthErrorResponse

if TYPE_CHECKING:
    from apps.hcen_auth.infrastructure.oauth.id_token_validator import JwksIdTokenValidator

logger = logging.getLogger(__name__)


class GubUyOidcClient:
    """gub.uy authorization-code client.

    WEB is a confidential client (``client_secret`` in the token request);
    MOBILE is a public client and sends ``code_verifier`` instead.
    """

    def __init__(
        self,
        *,
        authorization_endpoint: str,
        token_endpoint: str,
        userinfo_endpoint: str,
        client_ids: dict[ClientType, str],
        id_token_validator: "JwksIdTokenValidator",
        web_client_secret: str | None = None,
        scopes: str = "openid personal_info document",
        acr_values: str | None = None,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            client_ids: client_id per client type
            id_token_validator: JWKS-backed ID token validator
            timeout_seconds: bound for each IdP call (settings)
            transport: httpx transport override
        """
        self._authorization_endpoint = authorization_endpoint
        self._token_endpoint = token_endpoint
        self._userinfo_endpoint = userinfo_endpoint
        self._client_ids = dict(client_ids)
        self._id_token_validator = id_token_validator
        self._web_client_secret = web_client_secret
        self._scopes = scopes
        self._acr_values = acr_values
        self._timeout = timeout_seconds
        self._transport = transport

    def _client_id(self, client_type: ClientType) -> str:
        client_id = self._client_ids.get(client_type)
        if not client_id:
            raise AuthenticationError.oauth(
                f"No client configured for {client_type.value}",
                code="CLIENT_NOT_CONFIGURED",
                source=OAuthFailureSource.LOCAL,
            )
        return client_id

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def build_authorization_url(
        self,
        *,
        client_type: ClientType,
        redirect_uri: str,
        state: str,
        nonce: str,
        code_challenge: str | None = None,
    ) -> str:
        """Authorization endpoint URL."""
        params = {
            "response_type": "code",
            "client_id": self._client_id(client_type),
            "redirect_uri": redirect_uri,
            "scope": self._scopes,
            "state": state,
            "nonce": nonce,
        }
        if self._acr_values:
            params["acr_values"] = self._acr_values
        if client_type is ClientType.MOBILE and code_challenge:
            params["code_challenge"] = code_challenge
            params["code_challenge_method"] = "S256"

        return str(httpx.URL(self._authorization_endpoint, params=params))

    async def exchange_code(
        self,
        *,
        client_type: ClientType,
        code: str,
        redirect_uri: str,
        code_verifier: str | None = None,
    ) -> ProviderTokens:
        """Token endpoint call. One attempt; the code is single-use."""
        form = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
            "client_id": self._client_id(client_type),
        }
        if client_type is ClientType.MOBILE and code_verifier:
            form["code_verifier"] = code_verifier
        if client_type is ClientType.WEB and self._web_client_secret:
            form["client_secret"] = self._web_client_secret

        try:
            response = await asyncio.wait_for(self._post_token(form), timeout=self._timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning("Token exchange timed out", extra={"client_type": client_type.value})
            raise AuthenticationError.oauth(
                "Identity provider did not answer in time",
                code="IDP_TIMEOUT",
                source=OAuthFailureSource.NETWORK,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Token exchange request failed", extra={"error": str(e)})
            raise AuthenticationError.oauth(
                "Identity provider is unreachable",
                code="IDP_UNREACHABLE",
                source=OAuthFailureSource.NETWORK,
            ) from e

        if response.status_code != 200:
            upstream = self._parse_error(response)
            logger.warning(
                "Token exchange rejected",
                extra={
                    "status": response.status_code,
                    "oauth_error": upstream.error if upstream else None,
                },
            )
            raise AuthenticationError.oauth(
                "Token exchange failed",
                code="TOKEN_EXCHANGE_FAILED",
                oauth_error=upstream.error if upstream else None,
                oauth_error_description=upstream.error_description if upstream else None,
            )

        try:
            body = GubUyTokenResponse.model_validate(response.json())
        except ValueError as e:
            raise AuthenticationError.oauth(
                "Malformed token response",
                code="TOKEN_EXCHANGE_FAILED",
                oauth_error="invalid_response",
            ) from e

        logger.info("Token exchange succeeded", extra={"client_type": client_type.value})
        return body.to_tokens()

    async def _post_token(self, form: dict[str, str]) -> httpx.Response:
        async with self._http_client() as client:
            return await client.post(
                self._token_endpoint,
                data=form,
                headers={"Accept": "application/json"},
            )

    @staticmethod
    def _parse_error(response: httpx.Response) -> OAuthErrorResponse | None:
        try:
            return OAuthErrorResponse.model_validate(response.json())
        except ValueError:
            return None

    async def validate_id_token(
        self,
        id_token: str,
        *,
        nonce: str,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        return await self._id_token_validator.validate(
            id_token, nonce=nonce, access_token=access_token
        )

    async def fetch_user_info(self, access_token: str) -> dict[str, Any]:
        """Userinfo endpoint claims."""
        try:
            async with self._http_client() as client:
                response = await client.get(
                    self._userinfo_endpoint,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Userinfo request rejected", extra={"status": e.response.status_code})
            raise AuthenticationError.oauth(
                f"Userinfo request failed: {e.response.status_code}",
                code="USERINFO_FAILED",
            ) from e
        except httpx.HTTPError as e:
            raise AuthenticationError.oauth(
                "Userinfo request failed",
                code="USERINFO_FAILED",
                source=OAuthFailureSource.NETWORK,
            ) from e
        except ValueError as e:
            raise AuthenticationError.oauth(
                "Malformed userinfo response", code="USERINFO_FAILED"
            ) from e
