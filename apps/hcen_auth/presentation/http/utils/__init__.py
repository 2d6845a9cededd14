"""HTTP utilities."""

from apps.hcen_auth.presentation.http.utils.client_ip import resolve_client_ip

__all__ = ["resolve_client_ip"]
