"""Client Type Enum."""

from enum import Enum


class ClientType(str, Enum):
    """Kind of client driving the authorization flow.

    WEB is a confidential client (holds a client secret); MOBILE is a public
    client and must use PKCE.
    """

    WEB = "WEB"
    MOBILE = "MOBILE"

    @property
    def requires_pkce(self) -> bool:
        return self is ClientType.MOBILE
