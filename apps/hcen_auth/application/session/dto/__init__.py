"""Session DTOs."""

from apps.hcen_auth.application.session.dto.session import IssuedSession

__all__ = ["IssuedSession"]
