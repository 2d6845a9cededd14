"""Domain Enums."""

from apps.hcen_auth.domain.enums.client_type import ClientType

__all__ = ["ClientType"]
