"""Session Services."""

from apps.hcen_auth.application.session.services.session_manager import SessionManager

__all__ = ["SessionManager"]
