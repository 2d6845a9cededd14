"""Rate limit exceptions."""

from apps.hcen_auth.application.common.exceptions import ApplicationError


class RateLimitExceededError(ApplicationError):
    """Raised at the HTTP boundary when the limiter denies admission."""

    def __init__(self, endpoint: str, retry_after_seconds: int) -> None:
        self.endpoint = endpoint
        self.retry_after_seconds = retry_after_seconds
        super().__init__("Too many requests, try again later")
