"""HTTP User Directory.

UserDirectory implementation over the INUS REST API.
"""

from __future__ import annotations

import logging

import httpx

from apps.hcen_auth.application.common.exceptions import UserDirectoryUnavailableError
from apps.hcen_auth.application.users.ports import UserIdentity

logger = logging.getLogger(__name__)


class HttpUserDirectory:
    """Looks users up by CI: ``GET {base_url}/inus/users/{ci}``."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    async def find_by_ci(self, ci: str) -> UserIdentity | None:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(f"/inus/users/{ci}")
                if response.status_code == 404:
                    return None
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("User directory error", extra={"status": e.response.status_code})
            raise UserDirectoryUnavailableError(f"status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning("User directory request failed", extra={"error": str(e)})
            raise UserDirectoryUnavailableError(str(e)) from e
        except ValueError as e:
            raise UserDirectoryUnavailableError("malformed response") from e

        return UserIdentity(
            ci=data.get("ci", ci),
            inus_id=data.get("inusId"),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            role=data.get("role"),
        )
