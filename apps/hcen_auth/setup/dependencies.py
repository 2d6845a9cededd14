"""Dependency Injection Setup.

FastAPI Depends providers. The three Redis pools are separate handles,
each passed explicitly into the component that owns it.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import Depends

from apps.hcen_auth.application.common.ports import StorePool
from apps.hcen_auth.setup.config import Settings, get_settings

if TYPE_CHECKING:
    import redis.asyncio as aioredis


# ============================================================
# Infrastructure Dependencies
# ============================================================


def get_session_redis() -> "aioredis.Redis":
    """Session pool client."""
    from apps.hcen_auth.infrastructure.persistence_redis.client import get_pool_redis

    return get_pool_redis(StorePool.SESSION)


def get_cache_redis() -> "aioredis.Redis":
    """Cache pool client."""
    from apps.hcen_auth.infrastructure.persistence_redis.client import get_pool_redis

    return get_pool_redis(StorePool.CACHE)


def get_state_redis() -> "aioredis.Redis":
    """State pool client."""
    from apps.hcen_auth.infrastructure.persistence_redis.client import get_pool_redis

    return get_pool_redis(StorePool.STATE)


def get_session_store(redis: "aioredis.Redis" = Depends(get_session_redis)):
    from apps.hcen_auth.infrastructure.persistence_redis import RedisKeyValueStore

    return RedisKeyValueStore(redis, StorePool.SESSION)


def get_cache_store(redis: "aioredis.Redis" = Depends(get_cache_redis)):
    from apps.hcen_auth.infrastructure.persistence_redis import RedisKeyValueStore

    return RedisKeyValueStore(redis, StorePool.CACHE)


def get_state_store(redis: "aioredis.Redis" = Depends(get_state_redis)):
    from apps.hcen_auth.infrastructure.persistence_redis import RedisKeyValueStore

    return RedisKeyValueStore(redis, StorePool.STATE)


@lru_cache
def get_audit_sink():
    """AuthAuditSink provider (singleton)."""
    from apps.hcen_auth.infrastructure.audit import LoggingAuditSink

    return LoggingAuditSink()


# ============================================================
# Gateway Dependencies (Adapters)
# ============================================================


_id_token_validator = None


def get_id_token_validator(settings: Settings = Depends(get_settings)):
    """ID token validator (singleton, keeps the JWKS cache)."""
    global _id_token_validator
    if _id_token_validator is None:
        from apps.hcen_auth.infrastructure.oauth import JwksIdTokenValidator

        _id_token_validator = JwksIdTokenValidator(
            jwks_uri=settings.gubuy_jwks_uri,
            issuer=settings.gubuy_issuer,
            audiences=settings.gubuy_client_ids,
            algorithms=settings.gubuy_id_token_algorithms,
            timeout_seconds=settings.gubuy_timeout_seconds,
            cache_ttl_seconds=settings.gubuy_jwks_cache_ttl_seconds,
        )
    return _id_token_validator


def get_identity_provider(
    settings: Settings = Depends(get_settings),
    id_token_validator=Depends(get_id_token_validator),
):
    """IdentityProviderGateway provider (gub.uy)."""
    from apps.hcen_auth.domain.enums import ClientType
    from apps.hcen_auth.infrastructure.oauth import GubUyOidcClient

    return GubUyOidcClient(
        authorization_endpoint=settings.gubuy_authorization_endpoint,
        token_endpoint=settings.gubuy_token_endpoint,
        userinfo_endpoint=settings.gubuy_userinfo_endpoint,
        client_ids={
            ClientType.WEB: settings.gubuy_web_client_id,
            ClientType.MOBILE: settings.gubuy_mobile_client_id,
        },
        id_token_validator=id_token_validator,
        web_client_secret=settings.gubuy_web_client_secret,
        scopes=settings.gubuy_scopes,
        acr_values=settings.gubuy_acr_values,
        timeout_seconds=settings.gubuy_timeout_seconds,
    )


def get_user_directory(settings: Settings = Depends(get_settings)):
    """UserDirectory provider (INUS REST)."""
    from apps.hcen_auth.infrastructure.users import HttpUserDirectory

    return HttpUserDirectory(
        settings.users_api_base_url,
        timeout_seconds=settings.users_api_timeout_seconds,
    )


def get_session_token_service(settings: Settings = Depends(get_settings)):
    """SessionTokenService provider."""
    from apps.hcen_auth.infrastructure.security import JwtSessionTokenService

    return JwtSessionTokenService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )


# ============================================================
# Service Dependencies
# ============================================================


def get_state_tracker(
    store=Depends(get_state_store),
    audit_sink=Depends(get_audit_sink),
    settings: Settings = Depends(get_settings),
):
    from apps.hcen_auth.application.oauth.services import OAuthStateTracker

    return OAuthStateTracker(store, audit_sink, ttl_seconds=settings.oauth_state_ttl_seconds)


def get_token_exchange_service(
    state_tracker=Depends(get_state_tracker),
    identity_provider=Depends(get_identity_provider),
    audit_sink=Depends(get_audit_sink),
):
    from apps.hcen_auth.application.oauth.services import TokenExchangeService

    return TokenExchangeService(state_tracker, identity_provider, audit_sink)


def get_session_manager(
    store=Depends(get_session_store),
    audit_sink=Depends(get_audit_sink),
    settings: Settings = Depends(get_settings),
):
    from apps.hcen_auth.application.session.services import SessionManager

    return SessionManager(store, audit_sink, ttl_seconds=settings.session_ttl_seconds)


def get_rate_limiter(
    store=Depends(get_state_store),
    audit_sink=Depends(get_audit_sink),
    settings: Settings = Depends(get_settings),
):
    from apps.hcen_auth.application.ratelimit.services import RateLimiter

    return RateLimiter(
        store,
        audit_sink,
        window_seconds=settings.rate_limit_window_seconds,
        max_requests=settings.rate_limit_max_requests,
        endpoint_limits=settings.rate_limit_endpoint_overrides,
    )


def get_profile_cache(store=Depends(get_cache_store)):
    from apps.hcen_auth.application.cache.services import ProfileCacheInvalidator

    return ProfileCacheInvalidator(store)


# ============================================================
# Use Case Dependencies
# ============================================================


def get_initiate_login_interactor(
    state_tracker=Depends(get_state_tracker),
    identity_provider=Depends(get_identity_provider),
):
    from apps.hcen_auth.application.oauth.commands import InitiateLoginInteractor

    return InitiateLoginInteractor(
        state_tracker=state_tracker,
        identity_provider=identity_provider,
    )


def get_oauth_callback_interactor(
    exchange_service=Depends(get_token_exchange_service),
    session_manager=Depends(get_session_manager),
    profile_cache=Depends(get_profile_cache),
    identity_provider=Depends(get_identity_provider),
    user_directory=Depends(get_user_directory),
    token_service=Depends(get_session_token_service),
):
    from apps.hcen_auth.application.oauth.commands import OAuthCallbackInteractor

    return OAuthCallbackInteractor(
        exchange_service=exchange_service,
        session_manager=session_manager,
        profile_cache=profile_cache,
        identity_provider=identity_provider,
        user_directory=user_directory,
        token_service=token_service,
    )


def get_get_session_query(
    token_service=Depends(get_session_token_service),
    session_manager=Depends(get_session_manager),
):
    from apps.hcen_auth.application.session.queries import GetSessionQueryService

    return GetSessionQueryService(token_service=token_service, session_manager=session_manager)


def get_refresh_session_interactor(
    token_service=Depends(get_session_token_service),
    session_manager=Depends(get_session_manager),
):
    from apps.hcen_auth.application.session.commands import RefreshSessionInteractor

    return RefreshSessionInteractor(token_service=token_service, session_manager=session_manager)


def get_logout_interactor(
    token_service=Depends(get_session_token_service),
    session_manager=Depends(get_session_manager),
):
    from apps.hcen_auth.application.session.commands import LogoutInteractor

    return LogoutInteractor(token_service=token_service, session_manager=session_manager)
