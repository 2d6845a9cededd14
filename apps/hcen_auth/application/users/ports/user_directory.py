"""UserDirectory Port.

Identity lookup by citizen ID (CI) against the national user index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class UserIdentity:
    ci: str
    inus_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None


class UserDirectory(Protocol):
    async def find_by_ci(self, ci: str) -> UserIdentity | None:
        """None when no user is registered under ``ci``.

        Raises:
            UserDirectoryUnavailableError: lookup failed
        """
        ...
