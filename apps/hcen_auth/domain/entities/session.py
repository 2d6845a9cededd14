"""Session Entity."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any

from apps.hcen_auth.domain.enums import ClientType


@dataclass(frozen=True, slots=True)
class Session:
    """Server-side session held in the Session pool under ``session:{id}``."""

    session_id: str
    subject_id: str
    client_type: ClientType
    issued_at: datetime
    expires_at: datetime
    attributes: dict[str, str] = field(default_factory=dict)

    def remaining_seconds(self, now: datetime) -> int:
        return max(0, int((self.expires_at - now).total_seconds()))

    def extended(self, now: datetime, ttl_seconds: int) -> Session:
        """Same identifier, new expiry."""
        return replace(self, expires_at=now + timedelta(seconds=ttl_seconds))

    def to_record(self) -> dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "subjectId": self.subject_id,
            "clientType": self.client_type.value,
            "issuedAt": self.issued_at.isoformat(),
            "expiresAt": self.expires_at.isoformat(),
            "attributes": dict(self.attributes),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Session:
        return cls(
            session_id=record["sessionId"],
            subject_id=record["subjectId"],
            client_type=ClientType(record["clientType"]),
            issued_at=datetime.fromisoformat(record["issuedAt"]),
            expires_at=datetime.fromisoformat(record["expiresAt"]),
            attributes={str(k): str(v) for k, v in record.get("attributes", {}).items()},
        )
