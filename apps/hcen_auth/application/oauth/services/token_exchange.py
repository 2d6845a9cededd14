"""TokenExchangeService - authorization-code exchange.

Per attempt: ISSUED → CALLBACK_RECEIVED → EXCHANGED | FAILED.

Workflow:
    1. Pre-flight validation (no store or network access)
    2. Consume state; client type and redirect URI must match the record
    3. MOBILE: verify PKCE locally, before any upstream call
    4. Exchange the code with the IdP (single attempt, bounded timeout)
    5. Validate the ID token (nonce bound at issue time) and resolve the subject
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING, NoReturn

from apps.hcen_auth.application.audit.ports import (
    AuthAuditEvent,
    AuthAuditEventType,
    short_ref,
)
from apps.hcen_auth.application.common.clock import utc_now
from apps.hcen_auth.application.oauth.dto import ExchangeResult
from apps.hcen_auth.domain.enums import ClientType
from apps.hcen_auth.domain.exceptions import AuthenticationError, OAuthFailureSource
from apps.hcen_auth.domain.services import is_valid_code_verifier, validate_code_challenge

if TYPE_CHECKING:
    from apps.hcen_auth.application.audit.ports import AuthAuditSink
    from apps.hcen_auth.application.common.clock import Clock
    from apps.hcen_auth.application.oauth.dto import CallbackRequest
    from apps.hcen_auth.application.oauth.ports import IdentityProviderGateway
    from apps.hcen_auth.application.oauth.services.state_tracker import OAuthStateTracker
    from apps.hcen_auth.domain.entities import AuthorizationState

logger = logging.getLogger(__name__)

SUBJECT_CLAIMS = ("uid", "sub")


class ExchangeStage(str, Enum):
    ISSUED = "ISSUED"
    CALLBACK_RECEIVED = "CALLBACK_RECEIVED"
    EXCHANGED = "EXCHANGED"
    FAILED = "FAILED"


class TokenExchangeService:
    """Drives the code exchange for one callback.

    Collaborators:
        - OAuthStateTracker: single-use state
        - IdentityProviderGateway: token endpoint + ID token validation
        - AuthAuditSink: EXCHANGE_SUCCEEDED / EXCHANGE_FAILED
    """

    def __init__(
        self,
        state_tracker: "OAuthStateTracker",
        identity_provider: "IdentityProviderGateway",
        audit_sink: "AuthAuditSink",
        *,
        clock: "Clock" = utc_now,
    ) -> None:
        self._state_tracker = state_tracker
        self._identity_provider = identity_provider
        self._audit_sink = audit_sink
        self._clock = clock

    async def exchange(self, request: "CallbackRequest") -> ExchangeResult:
        """Exchange the authorization code for tokens.

        Raises:
            AuthenticationError:
                OAUTH_ERROR (LOCAL) for malformed input or PKCE mismatch,
                INVALID_STATE for unknown/replayed/tampered state,
                OAUTH_ERROR (UPSTREAM/NETWORK) for IdP failures,
                INVALID_TOKEN for a rejected ID token
        """
        self._preflight(request)
        self._log_stage(ExchangeStage.CALLBACK_RECEIVED, request)

        # From here on every outcome, including cancellation, is audited
        try:
            stored = await self._state_tracker.consume(request.state)
            self._ensure_bound_to(request, stored)

            if request.client_type.requires_pkce and not validate_code_challenge(
                request.code_verifier, stored.code_challenge
            ):
                logger.warning(
                    "PKCE verification failed",
                    extra={"state": short_ref(request.state)},
                )
                raise AuthenticationError.pkce_mismatch()

            tokens = await self._identity_provider.exchange_code(
                client_type=request.client_type,
                code=request.code,
                redirect_uri=request.redirect_uri,
                code_verifier=request.code_verifier,
            )
            if not tokens.id_token:
                raise AuthenticationError.oauth(
                    "Token response did not include an id_token",
                    oauth_error="invalid_response",
                )

            claims = await self._identity_provider.validate_id_token(
                tokens.id_token,
                nonce=stored.nonce,
                access_token=tokens.access_token,
            )
            subject_id = self._subject_from(claims)
        except (Exception, asyncio.CancelledError) as exc:
            await self._record_failure(request, exc)
            raise

        self._log_stage(ExchangeStage.EXCHANGED, request, subject_id=subject_id)
        await self._audit_sink.record(
            AuthAuditEvent(
                event_type=AuthAuditEventType.EXCHANGE_SUCCEEDED,
                occurred_at=self._clock(),
                client_type=request.client_type,
                subject_id=subject_id,
                state_ref=short_ref(request.state),
                client_ip=request.client_ip,
            )
        )
        return ExchangeResult(
            subject_id=subject_id,
            client_type=request.client_type,
            claims=claims,
            tokens=tokens,
        )

    async def reject(
        self,
        state_token: str | None,
        error: str,
        error_description: str | None = None,
        *,
        client_type: ClientType = ClientType.WEB,
    ) -> NoReturn:
        """Terminate an attempt the IdP reported as failed.

        The state is dropped so it cannot be reused.

        Raises:
            AuthenticationError: OAUTH_ERROR (UPSTREAM) carrying the IdP error
        """
        if state_token:
            await self._state_tracker.invalidate(state_token)
        logger.warning(
            "Identity provider returned an error",
            extra={"state": short_ref(state_token), "oauth_error": error},
        )
        await self._audit_sink.record(
            AuthAuditEvent(
                event_type=AuthAuditEventType.EXCHANGE_FAILED,
                occurred_at=self._clock(),
                client_type=client_type,
                state_ref=short_ref(state_token),
                reason=error,
            )
        )
        raise AuthenticationError.oauth(
            "Identity provider rejected the authorization",
            code="IDP_AUTHORIZATION_FAILED",
            oauth_error=error,
            oauth_error_description=error_description,
        )

    def _preflight(self, request: "CallbackRequest") -> None:
        """Reject malformed callbacks before touching the store or the IdP."""
        if not request.code:
            raise AuthenticationError.invalid_request("Authorization code is required")
        if not request.state:
            raise AuthenticationError.invalid_request("State is required")
        if not request.redirect_uri:
            raise AuthenticationError.invalid_request("redirect_uri is required")

        if request.client_type is ClientType.MOBILE:
            if not request.code_verifier:
                raise AuthenticationError.oauth(
                    "code_verifier is required for mobile clients",
                    code="PKCE_VERIFIER_REQUIRED",
                    oauth_error="invalid_request",
                    source=OAuthFailureSource.LOCAL,
                )
            if not is_valid_code_verifier(request.code_verifier):
                raise AuthenticationError.oauth(
                    "code_verifier has an invalid format",
                    code="PKCE_VERIFIER_INVALID",
                    oauth_error="invalid_request",
                    source=OAuthFailureSource.LOCAL,
                )

    def _ensure_bound_to(self, request: "CallbackRequest", stored: "AuthorizationState") -> None:
        if stored.client_type is not request.client_type:
            logger.warning(
                "State client type mismatch",
                extra={
                    "expected": stored.client_type.value,
                    "actual": request.client_type.value,
                },
            )
            raise AuthenticationError.invalid_state("State client type mismatch")
        if stored.redirect_uri != request.redirect_uri:
            logger.warning(
                "State redirect URI mismatch",
                extra={"state": short_ref(request.state)},
            )
            raise AuthenticationError.invalid_state("State redirect URI mismatch")

    @staticmethod
    def _subject_from(claims: dict) -> str:
        for name in SUBJECT_CLAIMS:
            value = claims.get(name)
            if isinstance(value, str) and value.strip():
                return value.strip()
        raise AuthenticationError.generic("Subject identifier not found in ID token")

    async def _record_failure(self, request: "CallbackRequest", exc: BaseException) -> None:
        if isinstance(exc, AuthenticationError):
            reason = exc.code
        elif isinstance(exc, asyncio.CancelledError):
            reason = "CANCELLED"
        else:
            reason = type(exc).__name__

        self._log_stage(ExchangeStage.FAILED, request, reason=reason)
        await self._audit_sink.record(
            AuthAuditEvent(
                event_type=AuthAuditEventType.EXCHANGE_FAILED,
                occurred_at=self._clock(),
                client_type=request.client_type,
                state_ref=short_ref(request.state),
                client_ip=request.client_ip,
                reason=reason,
            )
        )

    def _log_stage(
        self,
        stage: ExchangeStage,
        request: "CallbackRequest",
        *,
        subject_id: str | None = None,
        reason: str | None = None,
    ) -> None:
        level = logging.WARNING if stage is ExchangeStage.FAILED else logging.INFO
        logger.log(
            level,
            "Authorization attempt %s",
            stage.value,
            extra={
                "stage": stage.value,
                "state": short_ref(request.state),
                "client_type": request.client_type.value,
                "subject_id": subject_id,
                "reason": reason,
            },
        )
