"""OAuth state and OIDC nonce generation."""

import secrets

STATE_BYTES = 16


def generate_state() -> str:
    """16 CSPRNG bytes, base64url without padding (22 chars)."""
    return secrets.token_urlsafe(STATE_BYTES)


def generate_nonce() -> str:
    """Same routine, entropy source and length as :func:`generate_state`.

    Intentional: deployed clients expect nonce and state in the same format.
    The two values are still generated independently per attempt.
    """
    return generate_state()
