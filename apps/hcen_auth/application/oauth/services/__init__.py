"""OAuth Services."""

from apps.hcen_auth.application.oauth.services.state_tracker import OAuthStateTracker
from apps.hcen_auth.application.oauth.services.token_exchange import (
    ExchangeStage,
    TokenExchangeService,
)

__all__ = ["OAuthStateTracker", "TokenExchangeService", "ExchangeStage"]
