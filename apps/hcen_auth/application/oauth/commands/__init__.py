"""OAuth Commands."""

from apps.hcen_auth.application.oauth.commands.callback import OAuthCallbackInteractor
from apps.hcen_auth.application.oauth.commands.initiate_login import InitiateLoginInteractor

__all__ = ["InitiateLoginInteractor", "OAuthCallbackInteractor"]
