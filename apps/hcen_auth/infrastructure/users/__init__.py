"""Users directory adapters."""

from apps.hcen_auth.infrastructure.users.http_user_directory import HttpUserDirectory

__all__ = ["HttpUserDirectory"]
