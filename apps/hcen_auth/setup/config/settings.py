"""Application Settings.

Environment variables use the ``HCEN_AUTH_`` prefix, e.g.
``HCEN_AUTH_GUBUY_WEB_CLIENT_ID`` → ``gubuy_web_client_id``.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Authentication broker settings.

    Loaded from the environment. Each Redis URL points at one logical pool
    (database index) so the three pools keep separate TTL policies.
    """

    # Service
    app_name: str = "HCEN Auth Broker"
    service_name: str = "hcen-auth"
    service_version: str = "1.0.0"
    environment: str = "local"
    log_level: str = "INFO"
    api_v1_prefix: str = "/api/v1"
    cors_origins: Optional[str] = None

    # Redis (one URL per logical pool)
    redis_session_url: str = "redis://localhost:6379/0"
    redis_cache_url: str = "redis://localhost:6379/1"
    redis_state_url: str = "redis://localhost:6379/2"

    # TTLs (seconds)
    session_ttl_seconds: int = 3600
    oauth_state_ttl_seconds: int = 600

    # Rate limiting
    rate_limit_window_seconds: int = 60
    rate_limit_max_requests: int = 20
    rate_limit_endpoint_overrides: dict[str, int] = Field(
        default_factory=lambda: {
            "auth/login/initiate": 10,
            "auth/callback": 10,
            "auth/session/refresh": 30,
        }
    )

    # gub.uy OIDC
    gubuy_issuer: str = "https://auth-testing.iduruguay.gub.uy/oidc/v1"
    gubuy_authorization_endpoint: str = "https://auth-testing.iduruguay.gub.uy/oidc/v1/authorize"
    gubuy_token_endpoint: str = "https://auth-testing.iduruguay.gub.uy/oidc/v1/token"
    gubuy_userinfo_endpoint: str = "https://auth-testing.iduruguay.gub.uy/oidc/v1/userinfo"
    gubuy_jwks_uri: str = "https://auth-testing.iduruguay.gub.uy/oidc/v1/jwks"
    gubuy_web_client_id: str = ""
    gubuy_web_client_secret: Optional[str] = None
    gubuy_mobile_client_id: str = ""
    gubuy_scopes: str = "openid personal_info document"
    gubuy_acr_values: str = "urn:iduruguay:nid:2 urn:iduruguay:nid:3"
    gubuy_id_token_algorithms: list[str] = Field(default_factory=lambda: ["RS256"])
    gubuy_timeout_seconds: float = 10.0
    gubuy_jwks_cache_ttl_seconds: int = 3600
    web_callback_uri: str = "http://localhost:8000/api/v1/auth/callback"

    # Session JWT
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "hcen.uy/api/v1/auth"
    jwt_audience: str = "hcen-api"

    # Users directory (INUS)
    users_api_base_url: str = "http://localhost:8080/hcen/api"
    users_api_timeout_seconds: float = 5.0

    model_config = SettingsConfigDict(
        env_prefix="HCEN_AUTH_",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("gubuy_web_client_secret", "cors_origins", mode="before")
    @classmethod
    def _empty_string_to_none(cls, value: Optional[str]):
        """Treat blank strings as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def gubuy_client_ids(self) -> list[str]:
        return [cid for cid in (self.gubuy_web_client_id, self.gubuy_mobile_client_id) if cid]


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings instance."""
    return Settings()
