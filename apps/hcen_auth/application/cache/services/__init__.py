"""Cache Services."""

from apps.hcen_auth.application.cache.services.profile_cache import ProfileCacheInvalidator

__all__ = ["ProfileCacheInvalidator"]
