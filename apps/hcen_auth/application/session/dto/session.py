"""Session DTOs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from apps.hcen_auth.domain.entities import Session


@dataclass(frozen=True, slots=True)
class IssuedSession:
    session: "Session"
    session_token: str
    expires_in: int
