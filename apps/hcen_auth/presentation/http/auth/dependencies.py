"""Bearer session token extraction."""

from typing import Optional

from fastapi import Header

from apps.hcen_auth.domain.exceptions import AuthenticationError


def _parse_bearer(header_value: Optional[str]) -> Optional[str]:
    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


async def get_bearer_session_token(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> str:
    token = _parse_bearer(authorization)
    if not token:
        raise AuthenticationError.invalid_token("Missing bearer session token")
    return token
