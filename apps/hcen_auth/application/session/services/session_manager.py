"""SessionManager - server-side session lifecycle.

Sessions live in the Session pool under ``session:{id}`` with a fixed TTL.
"""

from __future__ import annotations

import json
import logging
import re
import secrets
from datetime import timedelta
from typing import TYPE_CHECKING, Mapping

from apps.hcen_auth.application.audit.ports import (
    AuthAuditEvent,
    AuthAuditEventType,
    short_ref,
)
from apps.hcen_auth.application.common.clock import utc_now
from apps.hcen_auth.application.common.keys import session_key
from apps.hcen_auth.domain.entities import Session
from apps.hcen_auth.domain.exceptions import AuthenticationError

if TYPE_CHECKING:
    from apps.hcen_auth.application.audit.ports import AuthAuditSink
    from apps.hcen_auth.application.common.clock import Clock
    from apps.hcen_auth.application.common.ports import KeyValueStore
    from apps.hcen_auth.domain.enums import ClientType

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_SECONDS = 3600
SESSION_ID_BYTES = 32
# token_urlsafe(32) → 43 base64url characters
_SESSION_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{43}")


def is_well_formed_session_id(session_id: str | None) -> bool:
    return bool(session_id) and _SESSION_ID_PATTERN.fullmatch(session_id) is not None


class SessionManager:
    """Creates, reads, refreshes and invalidates sessions.

    Collaborators:
        - KeyValueStore: Session pool
        - AuthAuditSink: SESSION_CREATED / SESSION_REFRESHED / SESSION_INVALIDATED
    """

    def __init__(
        self,
        store: "KeyValueStore",
        audit_sink: "AuthAuditSink",
        *,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        clock: "Clock" = utc_now,
    ) -> None:
        self._store = store
        self._audit_sink = audit_sink
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    async def create(
        self,
        subject_id: str,
        client_type: "ClientType",
        attributes: Mapping[str, str] | None = None,
    ) -> Session:
        """Create a session with a random, unguessable identifier.

        Args:
            subject_id: Citizen ID (CI)
            client_type: WEB or MOBILE
            attributes: Extra string attributes (name, role, ...)

        Returns:
            The stored Session
        """
        if not subject_id:
            raise AuthenticationError.generic("Cannot create a session without a subject")

        now = self._clock()
        session = Session(
            session_id=secrets.token_urlsafe(SESSION_ID_BYTES),
            subject_id=subject_id,
            client_type=client_type,
            issued_at=now,
            expires_at=now + timedelta(seconds=self._ttl_seconds),
            attributes={str(k): str(v) for k, v in (attributes or {}).items()},
        )
        await self._write(session)

        logger.info(
            "Session created",
            extra={
                "session": short_ref(session.session_id),
                "subject_id": subject_id,
                "client_type": client_type.value,
            },
        )
        await self._audit(AuthAuditEventType.SESSION_CREATED, session)
        return session

    async def get(self, session_id: str) -> Session:
        """Load a session.

        Raises:
            AuthenticationError: INVALID_TOKEN for a malformed identifier
                (checked before any store access) or an unreadable record,
                TOKEN_EXPIRED when the record is gone
        """
        if not is_well_formed_session_id(session_id):
            raise AuthenticationError.invalid_token("Malformed session identifier")

        raw = await self._store.get(session_key(session_id))
        if raw is None:
            raise AuthenticationError.token_expired("Session has expired")

        try:
            return Session.from_record(json.loads(raw))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(
                "Corrupt session record",
                extra={"session": short_ref(session_id), "error": str(e)},
            )
            raise AuthenticationError.invalid_token("Unreadable session") from e

    async def exists(self, session_id: str) -> bool:
        if not is_well_formed_session_id(session_id):
            return False
        return await self._store.exists(session_key(session_id))

    async def refresh(self, session_id: str) -> Session:
        """Slide the expiry without rotating the identifier.

        Raises:
            AuthenticationError: as :meth:`get`; TOKEN_EXPIRED also when the
                session is invalidated between the read and the write
        """
        session = await self.get(session_id)
        refreshed = session.extended(self._clock(), self._ttl_seconds)
        # Overwrite only a live record so a concurrent logout wins
        written = await self._store.replace(
            session_key(session_id),
            json.dumps(refreshed.to_record()),
            self._ttl_seconds,
        )
        if not written:
            logger.info(
                "Session ended during refresh",
                extra={"session": short_ref(session_id)},
            )
            raise AuthenticationError.token_expired("Session has expired")

        logger.info("Session refreshed", extra={"session": short_ref(session_id)})
        await self._audit(AuthAuditEventType.SESSION_REFRESHED, refreshed)
        return refreshed

    async def invalidate(self, session_id: str) -> bool:
        """Delete the session. Idempotent; returns whether a record was removed."""
        if not is_well_formed_session_id(session_id):
            return False

        removed = await self._store.delete(session_key(session_id))
        logger.info(
            "Session invalidated",
            extra={"session": short_ref(session_id), "removed": removed},
        )
        await self._audit_sink.record(
            AuthAuditEvent(
                event_type=AuthAuditEventType.SESSION_INVALIDATED,
                occurred_at=self._clock(),
                session_ref=short_ref(session_id),
                details={"removed": str(removed).lower()},
            )
        )
        return removed

    async def _write(self, session: Session) -> None:
        await self._store.set(
            session_key(session.session_id),
            json.dumps(session.to_record()),
            self._ttl_seconds,
        )

    async def _audit(self, event_type: AuthAuditEventType, session: Session) -> None:
        await self._audit_sink.record(
            AuthAuditEvent(
                event_type=event_type,
                occurred_at=self._clock(),
                client_type=session.client_type,
                subject_id=session.subject_id,
                session_ref=short_ref(session.session_id),
            )
        )
