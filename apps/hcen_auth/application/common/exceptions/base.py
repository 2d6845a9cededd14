"""Base application exceptions."""

from __future__ import annotations


class ApplicationError(Exception):
    """Base class for application-layer exceptions."""

    def __init__(self, message: str = "Application error occurred") -> None:
        self.message = message
        super().__init__(message)
