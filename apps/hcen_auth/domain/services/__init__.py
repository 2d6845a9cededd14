"""Domain Services.

Crypto primitives for the authorization flow. Pure functions, no state.
"""

from apps.hcen_auth.domain.services.pkce import (
    ensure_sha256_available,
    generate_code_challenge,
    generate_code_verifier,
    generate_pkce_pair,
    is_valid_code_verifier,
    validate_code_challenge,
)
from apps.hcen_auth.domain.services.state_tokens import generate_nonce, generate_state

__all__ = [
    "ensure_sha256_available",
    "generate_code_challenge",
    "generate_code_verifier",
    "generate_pkce_pair",
    "is_valid_code_verifier",
    "validate_code_challenge",
    "generate_nonce",
    "generate_state",
]
