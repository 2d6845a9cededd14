"""KeyValueStore Port.

Uniform interface over the three logical pools. Every method is a
suspension point; failures surface as ``StoreUnavailableError``.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class StorePool(str, Enum):
    """Logical pools, each with its own TTL policy and key namespace."""

    SESSION = "session"  # session:{id}
    CACHE = "cache"  # user:profile:{ci}, policy:cache:{ci}:{specialty}:{docType}
    STATE = "state"  # oauth:state:{token}, ratelimit:{ip}:{endpoint}


class KeyValueStore(Protocol):
    """Key-value store bound to one pool."""

    @property
    def pool(self) -> StorePool: ...

    async def get(self, key: str) -> str | None:
        """Value, or None when absent or expired."""
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Write with a TTL (overwrites)."""
        ...

    async def delete(self, key: str) -> bool:
        """True when a key was removed. Absent keys are not an error."""
        ...

    async def exists(self, key: str) -> bool: ...

    async def expire(self, key: str, ttl_seconds: int) -> bool:
        """Reset the TTL. False when the key is absent."""
        ...

    async def replace(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Overwrite an existing key with a new TTL in one step.

        False (and nothing written) when the key is absent.
        """
        ...

    async def ttl(self, key: str) -> int | None:
        """Remaining seconds, or None when absent or persistent."""
        ...

    async def get_and_delete(self, key: str) -> str | None:
        """Atomically read and remove.

        Concurrent callers on the same key: at most one gets the value.
        """
        ...

    async def increment_window(self, key: str, window_seconds: int) -> int:
        """Atomically increment a window counter and return the new count.

        The first increment creates the key with TTL = ``window_seconds``;
        later increments leave the TTL untouched.
        """
        ...

    async def delete_matching(self, pattern: str) -> int:
        """Delete keys matching a glob pattern. Returns the number removed."""
        ...
