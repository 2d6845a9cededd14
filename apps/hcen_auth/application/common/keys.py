"""Store key conventions.

Shared with existing deployments; do not change the layouts.
"""

SESSION_KEY_PREFIX = "session:"
USER_PROFILE_KEY_PREFIX = "user:profile:"
POLICY_CACHE_KEY_PREFIX = "policy:cache:"
STATE_KEY_PREFIX = "oauth:state:"
RATE_LIMIT_KEY_PREFIX = "ratelimit:"


def session_key(session_id: str) -> str:
    return f"{SESSION_KEY_PREFIX}{session_id}"


def user_profile_key(ci: str) -> str:
    return f"{USER_PROFILE_KEY_PREFIX}{ci}"


def policy_cache_key(ci: str, specialty: str, doc_type: str) -> str:
    return f"{POLICY_CACHE_KEY_PREFIX}{ci}:{specialty}:{doc_type}"


def policy_cache_pattern(ci: str) -> str:
    return f"{POLICY_CACHE_KEY_PREFIX}{ci}:*"


def state_key(state_token: str) -> str:
    return f"{STATE_KEY_PREFIX}{state_token}"


def normalize_endpoint(endpoint: str) -> str:
    """``/auth/login/initiate`` → ``auth:login:initiate``."""
    return endpoint.lstrip("/").replace("/", ":")


def rate_limit_key(client_ip: str, endpoint: str) -> str:
    return f"{RATE_LIMIT_KEY_PREFIX}{client_ip}:{normalize_endpoint(endpoint)}"


def rate_limit_pattern(client_ip: str) -> str:
    return f"{RATE_LIMIT_KEY_PREFIX}{client_ip}:*"
