"""ID Token Validator.

Verifies gub.uy ID tokens against the provider's JWKS.
"""

from __future__ import annotations

import hmac
import logging
import time
from typing import Any, Callable, Iterable

import httpx
from jose import ExpiredSignatureError, JWTError, jwt

from apps.hcen_auth.domain.exceptions import AuthenticationError, OAuthFailureSource

logger = logging.getLogger(__name__)

DEFAULT_JWKS_CACHE_TTL_SECONDS = 3600


class JwksIdTokenValidator:
    """Signature, issuer, audience, expiry and nonce checks.

    The JWKS document is public key material; it is cached for
    ``cache_ttl_seconds`` and refetched early when a token names an
    unknown ``kid`` (key rotation).
    """

    def __init__(
        self,
        *,
        jwks_uri: str,
        issuer: str,
        audiences: Iterable[str],
        algorithms: Iterable[str] = ("RS256",),
        timeout_seconds: float = 10.0,
        cache_ttl_seconds: int = DEFAULT_JWKS_CACHE_TTL_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._jwks_uri = jwks_uri
        self._issuer = issuer
        self._audiences = frozenset(audiences)
        self._algorithms = list(algorithms)
        self._timeout = timeout_seconds
        self._cache_ttl = cache_ttl_seconds
        self._transport = transport
        self._monotonic = monotonic
        self._jwks: dict[str, Any] | None = None
        self._fetched_at = 0.0

    async def validate(
        self,
        id_token: str,
        *,
        nonce: str,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """Return verified claims.

        Raises:
            AuthenticationError: TOKEN_EXPIRED for an expired ID token,
                INVALID_TOKEN for any other rejection, OAUTH_ERROR when the
                JWKS cannot be fetched
        """
        try:
            header = jwt.get_unverified_header(id_token)
        except JWTError as e:
            raise AuthenticationError.invalid_token("Malformed ID token") from e

        jwks = await self._get_jwks()
        kid = header.get("kid")
        if kid and not self._has_kid(jwks, kid):
            jwks = await self._get_jwks(force=True)

        try:
            claims = jwt.decode(
                id_token,
                jwks,
                algorithms=self._algorithms,
                issuer=self._issuer,
                access_token=access_token,
                options={"verify_aud": False},
            )
        except ExpiredSignatureError as e:
            raise AuthenticationError.token_expired("ID token has expired") from e
        except JWTError as e:
            logger.warning("ID token rejected", extra={"error": str(e)})
            raise AuthenticationError.invalid_token("ID token validation failed") from e

        self._check_audience(claims.get("aud"))

        token_nonce = claims.get("nonce")
        if not isinstance(token_nonce, str) or not hmac.compare_digest(token_nonce, nonce):
            logger.warning("ID token nonce mismatch")
            raise AuthenticationError.invalid_token("ID token nonce mismatch")

        return claims

    def _check_audience(self, aud: Any) -> None:
        presented = {aud} if isinstance(aud, str) else set(aud or ())
        if not presented & self._audiences:
            raise AuthenticationError.invalid_token("ID token audience mismatch")

    @staticmethod
    def _has_kid(jwks: dict[str, Any], kid: str) -> bool:
        return any(key.get("kid") == kid for key in jwks.get("keys", []))

    async def _get_jwks(self, *, force: bool = False) -> dict[str, Any]:
        fresh = self._monotonic() - self._fetched_at < self._cache_ttl
        if self._jwks is not None and fresh and not force:
            return self._jwks

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._jwks_uri)
                response.raise_for_status()
                jwks = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("JWKS fetch failed", extra={"status": e.response.status_code})
            raise AuthenticationError.oauth(
                "Could not load identity provider keys", code="JWKS_UNAVAILABLE"
            ) from e
        except httpx.HTTPError as e:
            logger.warning("JWKS request failed", extra={"error": str(e)})
            raise AuthenticationError.oauth(
                "Could not load identity provider keys",
                code="JWKS_UNAVAILABLE",
                source=OAuthFailureSource.NETWORK,
            ) from e
        except ValueError as e:
            raise AuthenticationError.oauth(
                "Identity provider keys are not valid JSON", code="JWKS_UNAVAILABLE"
            ) from e

        if not isinstance(jwks, dict) or not isinstance(jwks.get("keys"), list):
            raise AuthenticationError.oauth(
                "Identity provider keys are malformed", code="JWKS_UNAVAILABLE"
            )

        self._jwks = jwks
        self._fetched_at = self._monotonic()
        logger.info("JWKS loaded", extra={"keys": len(jwks["keys"])})
        return jwks
