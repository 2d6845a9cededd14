"""Common Ports."""

from apps.hcen_auth.application.common.ports.kv_store import KeyValueStore, StorePool

__all__ = ["KeyValueStore", "StorePool"]
