"""Session Commands."""

from apps.hcen_auth.application.session.commands.logout import LogoutInteractor
from apps.hcen_auth.application.session.commands.refresh import RefreshSessionInteractor

__all__ = ["LogoutInteractor", "RefreshSessionInteractor"]
