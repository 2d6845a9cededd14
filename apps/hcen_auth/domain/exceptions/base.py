"""Base domain exception."""


class DomainError(Exception):
    """Base class for every domain exception."""

    def __init__(self, message: str = "Domain error occurred") -> None:
        self.message = message
        super().__init__(message)
