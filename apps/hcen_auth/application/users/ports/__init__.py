"""Users Ports."""

from apps.hcen_auth.application.users.ports.user_directory import UserDirectory, UserIdentity

__all__ = ["UserDirectory", "UserIdentity"]
