"""PKCE (RFC 7636) primitives, S256 method only."""

from __future__ import annotations

import base64
import hashlib
import hmac
import re
import secrets

from apps.hcen_auth.domain.exceptions import CryptoUnavailableError
from apps.hcen_auth.domain.value_objects import CodeVerifierChallengePair

VERIFIER_BYTES = 32  # → 43 base64url characters
MIN_VERIFIER_LENGTH = 43
MAX_VERIFIER_LENGTH = 128
_VERIFIER_CHARSET = re.compile(r"[A-Za-z0-9\-._~]+")


def _b64url(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _sha256(data: bytes) -> bytes:
    try:
        return hashlib.new("sha256", data).digest()
    except ValueError as e:
        raise CryptoUnavailableError("sha256") from e


def ensure_sha256_available() -> None:
    """Startup check.

    Raises:
        CryptoUnavailableError: SHA-256 is missing from this runtime
    """
    if "sha256" not in hashlib.algorithms_available:
        raise CryptoUnavailableError("sha256")
    _sha256(b"")


def generate_code_verifier() -> str:
    """32 CSPRNG bytes, base64url without padding (43 chars)."""
    return _b64url(secrets.token_bytes(VERIFIER_BYTES))


def generate_code_challenge(verifier: str) -> str:
    """base64url(SHA-256(ASCII(verifier))) without padding.

    Raises:
        CryptoUnavailableError: SHA-256 is missing from this runtime
        UnicodeEncodeError: verifier is not ASCII
    """
    return _b64url(_sha256(verifier.encode("ascii")))


def generate_pkce_pair() -> CodeVerifierChallengePair:
    verifier = generate_code_verifier()
    return CodeVerifierChallengePair(verifier=verifier, challenge=generate_code_challenge(verifier))


def validate_code_challenge(verifier: str | None, challenge: str | None) -> bool:
    """Recompute the challenge and compare in constant time.

    Never raises: absent or malformed input yields False.
    """
    if not verifier or not challenge:
        return False
    try:
        expected = generate_code_challenge(verifier)
        return hmac.compare_digest(expected, challenge)
    except (CryptoUnavailableError, TypeError, ValueError):
        return False


def is_valid_code_verifier(verifier: str | None) -> bool:
    """Length in [43, 128], charset ``[A-Za-z0-9-._~]``."""
    if not verifier:
        return False
    if not MIN_VERIFIER_LENGTH <= len(verifier) <= MAX_VERIFIER_LENGTH:
        return False
    return _VERIFIER_CHARSET.fullmatch(verifier) is not None
