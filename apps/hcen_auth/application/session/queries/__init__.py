"""Session Queries."""

from apps.hcen_auth.application.session.queries.get_session import GetSessionQueryService

__all__ = ["GetSessionQueryService"]
