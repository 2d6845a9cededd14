"""Domain Value Objects."""

from apps.hcen_auth.domain.value_objects.pkce_pair import CodeVerifierChallengePair

__all__ = ["CodeVerifierChallengePair"]
