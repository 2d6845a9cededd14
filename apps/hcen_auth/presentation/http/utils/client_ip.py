"""Client IP resolution."""

from fastapi import Request

FORWARDED_FOR_HEADER = "X-Forwarded-For"
UNKNOWN_CLIENT = "unknown"


def resolve_client_ip(request: Request) -> str:
    """First ``X-Forwarded-For`` hop, else the socket peer."""
    forwarded = request.headers.get(FORWARDED_FOR_HEADER)
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT
