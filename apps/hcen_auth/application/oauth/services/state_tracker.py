"""OAuthStateTracker - single-use OAuth state (CSRF) tracking.

Records live in the State pool under ``oauth:state:{token}`` and are
consumed with an atomic get-and-delete, so a replayed or double-submitted
callback can validate a state at most once.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from apps.hcen_auth.application.audit.ports import (
    AuthAuditEvent,
    AuthAuditEventType,
    short_ref,
)
from apps.hcen_auth.application.common.clock import utc_now
from apps.hcen_auth.application.common.keys import state_key
from apps.hcen_auth.domain.entities import AuthorizationState
from apps.hcen_auth.domain.exceptions import AuthenticationError
from apps.hcen_auth.domain.services import generate_nonce, generate_state

if TYPE_CHECKING:
    from apps.hcen_auth.application.audit.ports import AuthAuditSink
    from apps.hcen_auth.application.common.clock import Clock
    from apps.hcen_auth.application.common.ports import KeyValueStore
    from apps.hcen_auth.domain.enums import ClientType

logger = logging.getLogger(__name__)

DEFAULT_STATE_TTL_SECONDS = 600


class OAuthStateTracker:
    """Issues and validates OAuth ``state`` / OIDC ``nonce`` values.

    Responsibilities:
        - issue: generate state + nonce and persist the AuthorizationState
        - consume: atomically read and delete (exactly-once validation)

    Collaborators:
        - KeyValueStore: State pool
        - AuthAuditSink: STATE_ISSUED / STATE_CONSUMED events
    """

    def __init__(
        self,
        store: "KeyValueStore",
        audit_sink: "AuthAuditSink",
        *,
        ttl_seconds: int = DEFAULT_STATE_TTL_SECONDS,
        clock: "Clock" = utc_now,
    ) -> None:
        self._store = store
        self._audit_sink = audit_sink
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    async def issue(
        self,
        client_type: "ClientType",
        redirect_uri: str,
        code_challenge: str | None = None,
        *,
        client_ip: str | None = None,
    ) -> AuthorizationState:
        """Create and persist a new authorization state.

        Args:
            client_type: WEB or MOBILE
            redirect_uri: Callback URI bound to this attempt
            code_challenge: PKCE S256 challenge (MOBILE)
            client_ip: Requesting address, for audit

        Returns:
            The stored AuthorizationState; ``state_token`` goes into the
            redirect URL and ``nonce`` into the OIDC request.
        """
        if client_type is None:
            raise AuthenticationError.invalid_request("client_type is required")
        if not redirect_uri:
            raise AuthenticationError.invalid_request("redirect_uri is required")

        state = AuthorizationState(
            state_token=generate_state(),
            nonce=generate_nonce(),
            client_type=client_type,
            redirect_uri=redirect_uri,
            created_at=self._clock(),
            code_challenge=code_challenge,
        )
        await self._store.set(
            state_key(state.state_token),
            json.dumps(state.to_record()),
            self._ttl_seconds,
        )

        logger.info(
            "OAuth state issued",
            extra={
                "state": short_ref(state.state_token),
                "client_type": client_type.value,
                "ttl_seconds": self._ttl_seconds,
            },
        )
        await self._audit_sink.record(
            AuthAuditEvent(
                event_type=AuthAuditEventType.STATE_ISSUED,
                occurred_at=state.created_at,
                client_type=client_type,
                state_ref=short_ref(state.state_token),
                client_ip=client_ip,
            )
        )
        return state

    async def consume(self, state_token: str) -> AuthorizationState:
        """Atomically read and delete the state.

        Raises:
            AuthenticationError: INVALID_STATE when the token was never
                issued, was already consumed, expired, or is unreadable
        """
        if not state_token:
            raise AuthenticationError.invalid_state("Missing state")

        raw = await self._store.get_and_delete(state_key(state_token))
        if raw is None:
            logger.warning(
                "Invalid or expired OAuth state",
                extra={"state": short_ref(state_token)},
            )
            raise AuthenticationError.invalid_state()

        try:
            state = AuthorizationState.from_record(state_token, json.loads(raw))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(
                "Corrupt OAuth state record",
                extra={"state": short_ref(state_token), "error": str(e)},
            )
            raise AuthenticationError.invalid_state() from e

        await self._audit_sink.record(
            AuthAuditEvent(
                event_type=AuthAuditEventType.STATE_CONSUMED,
                occurred_at=self._clock(),
                client_type=state.client_type,
                state_ref=short_ref(state_token),
            )
        )
        return state

    async def exists(self, state_token: str) -> bool:
        if not state_token:
            return False
        return await self._store.exists(state_key(state_token))

    async def invalidate(self, state_token: str) -> bool:
        """Drop a state without validating it. Idempotent."""
        if not state_token:
            return False
        removed = await self._store.delete(state_key(state_token))
        if removed:
            logger.info("OAuth state invalidated", extra={"state": short_ref(state_token)})
        return removed
