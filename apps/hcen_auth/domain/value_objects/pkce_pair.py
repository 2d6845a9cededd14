"""PKCE verifier/challenge pair."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CodeVerifierChallengePair:
    """Verifier travels with the client; only the challenge is stored server-side."""

    verifier: str
    challenge: str
    method: str = "S256"
