"""Crypto runtime exceptions."""

from apps.hcen_auth.domain.exceptions.base import DomainError


class CryptoUnavailableError(DomainError):
    """A required hash primitive is missing from the runtime."""

    def __init__(self, algorithm: str = "sha256") -> None:
        self.algorithm = algorithm
        super().__init__(f"Hash algorithm not available: {algorithm}")
