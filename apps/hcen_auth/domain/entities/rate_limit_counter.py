"""RateLimitCounter Entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class RateLimitCounter:
    """Fixed-window request counter for one (client IP, endpoint) pair."""

    client_ip: str
    endpoint: str
    count: int
    window_start: datetime | None
    limit: int

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)

    @property
    def exceeded(self) -> bool:
        return self.count > self.limit
