"""ProfileCacheInvalidator.

Cache pool entries are owned by the profile and policy services. The
broker only reads them or drops them after an authentication outcome.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apps.hcen_auth.application.common.keys import (
    policy_cache_key,
    policy_cache_pattern,
    user_profile_key,
)

if TYPE_CHECKING:
    from apps.hcen_auth.application.common.ports import KeyValueStore

logger = logging.getLogger(__name__)


class ProfileCacheInvalidator:
    def __init__(self, store: "KeyValueStore") -> None:
        self._store = store

    async def cached_profile(self, ci: str) -> str | None:
        """Opaque cached profile payload, if any."""
        return await self._store.get(user_profile_key(ci))

    async def invalidate_user_profile(self, ci: str) -> bool:
        removed = await self._store.delete(user_profile_key(ci))
        if removed:
            logger.info("User profile cache invalidated", extra={"ci": ci})
        return removed

    async def invalidate_policy_decision(self, ci: str, specialty: str, doc_type: str) -> bool:
        return await self._store.delete(policy_cache_key(ci, specialty, doc_type))

    async def invalidate_policy_decisions(self, ci: str) -> int:
        removed = await self._store.delete_matching(policy_cache_pattern(ci))
        logger.info(
            "Policy decision cache invalidated",
            extra={"ci": ci, "removed": removed},
        )
        return removed
